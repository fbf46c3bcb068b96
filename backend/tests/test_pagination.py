import pytest

from utils.pagination import Page, PageRequest, generate_pagination_headers, parse_sort


@pytest.mark.parametrize("sort, expected", [
    ("name", ("name", False)),
    ("name,asc", ("name", False)),
    ("name,DESC", ("name", True)),
    (" date , desc ", ("date", True)),
])
def test_parse_sort(sort, expected):
    assert parse_sort(sort) == expected


def test_parse_sort_rejects_unknown_direction():
    with pytest.raises(ValueError):
        parse_sort("name,up")


def test_page_request_offset():
    assert PageRequest(page=3, size=20).offset == 60


def test_page_properties():
    page = Page(content=[1, 2], number=0, size=2, total_elements=5)
    assert page.total_pages == 3
    assert page.has_next
    assert not page.has_previous

    last = Page(content=[5], number=2, size=2, total_elements=5)
    assert not last.has_next
    assert last.has_previous


def test_empty_page():
    page = Page(content=[], number=0, size=20, total_elements=0)
    assert page.total_pages == 0
    assert not page.has_next

    headers = generate_pagination_headers(page, "/api/groups")
    assert headers["X-Total-Count"] == "0"
    assert headers["Link"] == (
        '</api/groups?page=0&size=20>; rel="last",'
        '</api/groups?page=0&size=20>; rel="first"'
    )


def test_middle_page_links():
    page = Page(content=["x"], number=1, size=1, total_elements=3)
    headers = generate_pagination_headers(page, "/api/groups/public", sort="name,desc")

    links = headers["Link"].split(",<")
    assert links[0] == '</api/groups/public?page=2&size=1&sort=name,desc>; rel="next"'
    assert 'rel="prev"' in links[1] and "page=0" in links[1]
    assert 'page=2&size=1&sort=name,desc>; rel="last"' in links[2]
    assert 'page=0&size=1&sort=name,desc>; rel="first"' in links[3]
