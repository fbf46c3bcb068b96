import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from main import app
from database import Base, get_db
from directory import GroupDirectory
from models import User
from auth import create_access_token
from stores import GroupStore, TransactionLedger

# Setup in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def client(db_session):
    """Create a FastAPI TestClient with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    # Clean up is handled by yield
    app.dependency_overrides.pop(get_db, None)

def make_user(db_session, email, full_name):
    user = User(email=email, full_name=full_name, is_active=True)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def test_user(db_session):
    """Create a test user and return the user object."""
    return make_user(db_session, "test@example.com", "Test User")

@pytest.fixture
def other_user(db_session):
    return make_user(db_session, "other@example.com", "Other User")

@pytest.fixture
def third_user(db_session):
    return make_user(db_session, "third@example.com", "Third User")

@pytest.fixture
def auth_headers(test_user):
    """Return authorization headers for the test user."""
    access_token = create_access_token(data={"sub": test_user.email})
    return {"Authorization": f"Bearer {access_token}"}

@pytest.fixture
def other_auth_headers(other_user):
    access_token = create_access_token(data={"sub": other_user.email})
    return {"Authorization": f"Bearer {access_token}"}

@pytest.fixture
def directory(db_session):
    """A group directory over SQLite-backed stores."""
    return GroupDirectory(GroupStore(db_session), TransactionLedger(db_session))
