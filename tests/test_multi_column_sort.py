from datetime import date, datetime, timedelta, timezone
from collections import namedtuple

import pytest

from tabledata.services.multi_column_sort import (
    MultiColumnSorter,
    NotArrayError,
    is_array_like,
    order_by,
)
from tabledata.services.predicate_values import UNDEFINED


def test_single_key_ascending():
    assert order_by([5, 1, 3], "+") == [1, 3, 5]


def test_single_key_descending():
    assert order_by([5, 1, 3], "-") == [5, 3, 1]


def test_case_insensitive_strings_with_stable_ties():
    assert order_by(["b", "A", "a", "B"], "") == ["A", "a", "b", "B"]


def test_type_precedence():
    obj = {}
    result = order_by([5, "x", None, UNDEFINED, obj], [])
    assert result == [5, obj, "x", None, UNDEFINED]
    assert result[-1] is UNDEFINED
    assert result[-2] is None


def test_multi_key_with_directions():
    rows = [{"a": 1, "b": 2}, {"a": 1, "b": 1}, {"a": 0, "b": 9}]
    assert order_by(rows, ["+a", "-b"]) == [{"a": 0, "b": 9}, {"a": 1, "b": 2}, {"a": 1, "b": 1}]


def test_stability_on_duplicate_keys():
    rows = [{"k": i % 3, "tag": i} for i in range(12)]
    result = order_by(rows, "k")
    for key in range(3):
        tags = [r["tag"] for r in result if r["k"] == key]
        assert tags == sorted(tags)


def test_descending_key_keeps_original_order_for_ties():
    rows = [{"k": 1, "tag": "first"}, {"k": 2, "tag": "x"}, {"k": 1, "tag": "second"}]
    assert [r["tag"] for r in order_by(rows, "-k")] == ["x", "first", "second"]


def test_reverse_order_flips_everything_including_ties():
    rows = [{"k": 1, "tag": "first"}, {"k": 2, "tag": "x"}, {"k": 1, "tag": "second"}]
    result = order_by(rows, "k", reverse_order=True)
    assert [r["tag"] for r in result] == ["x", "second", "first"]


def test_objects_keep_their_positions():
    rows = [{"v": {"n": 3}}, {"v": {"n": 1}}, {"v": {"n": 2}}]
    assert order_by(rows, "v") == rows


def test_missing_fields_sort_last():
    rows = [{"n": None}, {}, {"n": 2}, {"n": 1}]
    assert order_by(rows, "n") == [{"n": 1}, {"n": 2}, {"n": None}, {}]


def test_custom_compare_fn_receives_predicate_values():
    seen = []

    def by_length(v1, v2):
        seen.append((v1.kind, v2.kind))
        return len(str(v1.value)) - len(str(v2.value))

    assert order_by(["ccc", "a", "bb"], "", compare_fn=by_length) == ["a", "bb", "ccc"]
    assert seen


def test_input_is_not_mutated():
    rows = [3, 1, 2]
    order_by(rows, "")
    assert rows == [3, 1, 2]


def test_none_is_returned_unchanged():
    assert order_by(None, "a") is None


def test_tuples_and_strings_are_sortable():
    Row = namedtuple("Row", "name")
    assert order_by((Row("b"), Row("a")), "name") == [Row("a"), Row("b")]
    assert order_by("cab", "") == ["a", "b", "c"]


@pytest.mark.parametrize("value", [42, {"a": 1}, {1, 2}, object(), (x for x in [1])])
def test_non_array_input_raises(value):
    with pytest.raises(NotArrayError) as info:
        order_by(value, "")
    assert info.value.value is value
    assert info.value.code == "notarray"
    assert "Expected array" in str(info.value)


class Indexed:
    def __init__(self, items):
        self._items = items

    def __len__(self):
        return len(self._items)

    def __getitem__(self, i):
        return self._items[i]


class ItemOnly:
    def __init__(self, items):
        self.length = len(items)
        self._items = items

    def item(self, i):
        return self._items[i]


class WindowLike(Indexed):
    def __init__(self, items):
        super().__init__(items)
        self.window = self


def test_array_like_detection():
    assert is_array_like([])
    assert is_array_like("")
    assert is_array_like(Indexed([1]))
    assert is_array_like(ItemOnly([1]))
    assert not is_array_like(Indexed([]))
    assert not is_array_like(WindowLike([1]))
    assert not is_array_like(None)
    assert not is_array_like({"length": 1})


def test_array_like_objects_are_sorted():
    assert order_by(Indexed([2, 1]), "") == [1, 2]
    assert order_by(ItemOnly(["b", "a"]), "") == ["a", "b"]


def test_sorter_reuse():
    sorter = MultiColumnSorter([{"p": 10, "n": "B"}, {"p": 12, "n": "A"}, {"p": 10, "n": "A"}])
    rows = sorter.sort(["-p", "n"])
    assert [r["p"] for r in rows] == [12, 10, 10]
    assert [r["n"] for r in rows] == ["A", "A", "B"]
    assert sorter.sort("n")[0]["n"] == "A"


def test_datetime_min_sorts_without_error():
    rows = [{"d": datetime(2024, 1, 1)}, {"d": datetime.min}, {"d": datetime.max}]
    assert [r["d"] for r in order_by(rows, "d")] == [datetime.min, datetime(2024, 1, 1), datetime.max]


def test_dates_and_datetimes_share_one_scale():
    rows = [{"d": date(2024, 1, 1)}, {"d": datetime(2020, 1, 1, 12)}, {"d": datetime(2024, 1, 1, 6)}]
    assert [r["d"] for r in order_by(rows, "d")] == [
        datetime(2020, 1, 1, 12),
        date(2024, 1, 1),
        datetime(2024, 1, 1, 6),
    ]


def test_aware_datetimes_compare_in_utc():
    plus_two = timezone(timedelta(hours=2))
    early = datetime(2024, 1, 1, 11, 0, tzinfo=plus_two)  # 09:00 UTC
    late = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert order_by([late, early], "+") == [early, late]
    assert order_by([{"d": datetime.min.replace(tzinfo=plus_two)}, {"d": late}], "-d")[0]["d"] == late


def test_integer_path_matches_string_keys():
    assert order_by([{"0": "b"}, {"0": "a"}], "0") == [{"0": "a"}, {"0": "b"}]
    assert order_by([["b"], ["a"]], "0") == [["a"], ["b"]]
