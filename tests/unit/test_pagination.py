import pytest

from app.core.errors import ValidationError
from app.services.pagination import (
    ADMIN_MAX_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    paginate,
    parse_page,
    parse_page_size,
)


def test_parse_page_defaults_to_first_page():
    assert parse_page(None) == 1
    assert parse_page("  ") == 1
    assert parse_page("3") == 3


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "٣"])
def test_parse_page_rejects_non_positive_integers(raw):
    with pytest.raises(ValidationError) as exc:
        parse_page(raw)
    assert exc.value.status_code == 400
    assert exc.value.detail == "page must be a positive integer"


def test_parse_page_size_defaults_and_caps():
    assert parse_page_size(None) == DEFAULT_PAGE_SIZE
    assert parse_page_size(str(MAX_PAGE_SIZE)) == MAX_PAGE_SIZE
    assert parse_page_size("80", default=20, maximum=ADMIN_MAX_PAGE_SIZE) == 80


@pytest.mark.parametrize("raw", ["0", "51", "ten", "-5"])
def test_parse_page_size_rejects_out_of_range(raw):
    with pytest.raises(ValidationError) as exc:
        parse_page_size(raw)
    assert exc.value.detail == "pageSize must be a positive integer up to 50"


def test_admin_cap_is_reported_in_the_message():
    with pytest.raises(ValidationError) as exc:
        parse_page_size("101", default=20, maximum=ADMIN_MAX_PAGE_SIZE)
    assert exc.value.detail == "pageSize must be a positive integer up to 100"


def test_paginate_first_page():
    page = paginate(["a", "b", "c"], 1, 2)
    assert page.items == ["a", "b"]
    assert page.total == 3
    assert page.total_pages == 2
    assert page.has_next_page is True
    assert page.has_previous_page is False


def test_paginate_clamps_past_the_end():
    page = paginate(list(range(7)), 99, 3)
    assert page.page == 3
    assert page.items == [6]
    assert page.has_next_page is False
    assert page.has_previous_page is True


def test_paginate_empty_input_has_one_empty_page():
    page = paginate([], 4, 6)
    assert page.page == 1
    assert page.total_pages == 1
    assert page.items == []
    assert not page.has_next_page
    assert not page.has_previous_page


@pytest.mark.parametrize("total,size", [(0, 1), (1, 1), (5, 2), (6, 3), (13, 6), (50, 50)])
def test_pages_cover_every_item_exactly_once(total, size):
    items = list(range(total))
    first = paginate(items, 1, size)
    seen = []
    for number in range(1, first.total_pages + 1):
        page = paginate(items, number, size)
        assert len(page.items) <= size
        seen.extend(page.items)
    assert seen == items
