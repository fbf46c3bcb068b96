from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional

VALID_CURRENCIES = ['USD', 'EUR', 'GBP', 'JPY', 'CAD', 'PLN']

class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None

class User(UserBase):
    id: int
    is_active: bool

    class Config:
        from_attributes = True

class TokenData(BaseModel):
    email: Optional[str] = None

class GroupBase(BaseModel):
    name: str
    is_public: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Group name must not be blank')
        return v

class GroupWrite(GroupBase):
    """Body of POST/PUT /api/groups. `id` absent means a new group."""
    id: Optional[int] = None
    owner_id: Optional[int] = None  # Ignored on create, the caller becomes owner
    member_ids: set[int] = set()

class Group(GroupBase):
    id: int
    owner_id: int
    owner: User
    members: list[User]

    @field_validator('members', mode='before')
    @classmethod
    def order_members(cls, v):
        return sorted(v, key=lambda m: m["id"] if isinstance(m, dict) else m.id)

    class Config:
        from_attributes = True

class TransactionCreate(BaseModel):
    description: str
    amount: int  # In cents
    currency: str = "USD"
    date: str
    group_id: int
    payer_id: Optional[int] = None  # Defaults to the current user

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v):
        if v not in VALID_CURRENCIES:
            raise ValueError(f'Currency must be one of {VALID_CURRENCIES}')
        return v

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        if v <= 0:
            raise ValueError('Amount must be positive')
        return v

class Transaction(BaseModel):
    id: int
    description: str
    amount: int
    currency: str
    date: str
    group_id: int
    payer_id: int
    created_by_id: Optional[int] = None

    class Config:
        from_attributes = True

class TransactionPage(BaseModel):
    """A page of transactions with its position in the full result set."""
    content: list[Transaction]
    number: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool

    class Config:
        from_attributes = True
