import pytest

from tabledata.services.paging import PageResult, page_bounds, page_window


def test_second_page_of_twenty_five():
    rows = list(range(25))
    result = page_window(rows, 2, 10)
    assert result.rows == rows[10:20]
    assert result.total == 25


def test_result_unpacks_into_rows_and_total():
    rows, total = page_window(list("abc"), 1, 2)
    assert rows == ["a", "b"]
    assert total == 3


def test_partial_last_page():
    assert page_window(list(range(25)), 3, 10).rows == list(range(20, 25))


def test_out_of_range_page_is_empty():
    assert page_window(list(range(5)), 4, 10) == PageResult(rows=[], total=5)


def test_paging_is_idempotent():
    rows = list(range(30))
    assert page_window(rows, 2, 7) == page_window(rows, 2, 7)
    assert rows == list(range(30))


@pytest.mark.parametrize("page, count, expected", [(1, 10, (0, 10)), (3, 5, (10, 15))])
def test_page_bounds(page, count, expected):
    assert page_bounds(page, count) == expected
