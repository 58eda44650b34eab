from types import SimpleNamespace

import pytest

from tabledata.services.predicate_values import UNDEFINED
from tabledata.services.sort_predicates import (
    PathAccessor,
    PathSyntaxError,
    compile_path,
    compile_predicates,
    identity,
    resolve_step,
)


def test_dotted_path_reads_nested_mappings():
    get = compile_path("team.city")
    assert get({"team": {"city": "Leipzig"}}) == "Leipzig"


def test_path_reads_attributes_and_indices():
    row = SimpleNamespace(tags=["a", "b"], meta={"display name": SimpleNamespace(short="x")})
    assert compile_path("tags[1]")(row) == "b"
    assert compile_path('meta["display name"].short')(row) == "x"
    assert compile_path("meta['display name'].short")(row) == "x"


def test_missing_steps_yield_undefined():
    get = compile_path("team.city")
    assert get({"team": None}) is UNDEFINED
    assert get({}) is UNDEFINED
    assert compile_path("tags[5]")({"tags": [1]}) is UNDEFINED


def test_none_value_is_kept():
    assert compile_path("age")({"age": None}) is None


@pytest.mark.parametrize("path", ["", ".a", "a..b", "a b", "a[", "a[x]", "1a"])
def test_malformed_paths_raise(path):
    with pytest.raises(PathSyntaxError):
        compile_path(path)


def test_literal_paths_are_constant():
    get = compile_path('"first name"')
    assert isinstance(get, PathAccessor)
    assert get.constant
    assert get() == "first name"
    assert compile_path("0")() == 0
    assert not compile_path("name").constant


def test_single_entry_is_wrapped():
    (predicate,) = compile_predicates("-age")
    assert predicate.descending == -1
    assert predicate.get({"age": 3}) == 3


def test_empty_spec_sorts_by_identity_ascending():
    (predicate,) = compile_predicates([])
    assert predicate.get is identity
    assert predicate.descending == 1


def test_signs_and_bare_paths():
    plus, minus, bare, sign_only = compile_predicates(["+a", "-b", "c", "-"])
    assert [p.descending for p in (plus, minus, bare, sign_only)] == [1, -1, 1, -1]
    assert sign_only.get is identity
    assert bare.get({"c": 7}) == 7


def test_callable_entries_are_used_directly():
    def accessor(row):
        return row["x"] * 2

    (predicate,) = compile_predicates([accessor])
    assert predicate.get is accessor
    assert predicate.descending == 1


def test_constant_path_becomes_key_lookup():
    (predicate,) = compile_predicates(['-"first name"'])
    assert predicate.descending == -1
    assert predicate.get({"first name": "Ann"}) == "Ann"
    assert predicate.get({}) is UNDEFINED


def test_integer_step_falls_back_to_string_key():
    assert resolve_step({"0": "zero"}, 0) == "zero"
    assert resolve_step({0: "int", "0": "str"}, 0) == "int"
    assert resolve_step({"1": "one"}, 0) is UNDEFINED
    assert compile_path("rows[0]")({"rows": {"0": "x"}}) == "x"
