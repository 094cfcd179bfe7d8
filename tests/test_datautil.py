from dataclasses import dataclass, field
from typing import Optional

import pytest

from imtools import datautil as du


@dataclass(frozen=True)
class A:
    id: str
    num: int


ARR1 = [A("1", 1), A("2", 2), A("3", 3), A("4", 4), A("5", 5)]
ARR2 = [A("2", 2), A("4", 3), A("5", 3)]


def test_slice_sub_func():
    assert du.slice_sub_func(ARR1, ARR2, lambda i: i.id) == [A("1", 1), A("3", 3)]


def test_slice_sub():
    assert du.slice_sub(ARR1, ARR2) == [A("1", 1), A("3", 3), A("4", 4), A("5", 5)]


def test_slice_sub_dedupes_and_empty_b():
    assert du.slice_sub([1, 1, 2, 3], [3]) == [1, 2]
    assert du.slice_sub([1, 1], []) == [1, 1]


def test_slice_sub_any_and_convert_pre():
    assert du.slice_sub_any([1, 2, 3], ["2"], int) == [1, 3]
    assert du.slice_sub_convert_pre(["1", "2", "3"], [2], int) == ["1", "3"]


def test_slice_any_sub_keeps_duplicates():
    assert du.slice_any_sub([1, 1, 2, 3], [3], lambda x: x) == [1, 1, 2]


def test_slice_intersect_funcs():
    assert du.slice_intersect_funcs([1, 2, 3, 4], [4, 2], lambda x: x, lambda x: x) == [2, 4]
    assert du.slice_intersect_funcs([1, 2], [], lambda x: x, lambda x: x) == []


def test_distinct():
    assert du.distinct([1, 1, 1, 4, 4, 5, 2, 3, 3, 3, 6]) == [1, 4, 5, 2, 3, 6]
    assert du.distinct([7, 7]) == [7]
    assert du.distinct([7, 8]) == [7, 8]


def test_distinct_any_variants():
    words = ["apple", "avocado", "banana"]
    assert du.distinct_any(words, lambda w: w[0]) == ["apple", "banana"]
    assert du.distinct_any_get_comparable(words, lambda w: w[0]) == ["a", "b"]


def test_delete():
    arr = list(range(10))
    assert du.delete(arr, 0, 1, -1, -2) == [2, 3, 4, 5, 6, 7]
    assert du.delete(arr) == list(range(10))
    assert du.delete(arr, 1) == [0, 2, 3, 4, 5, 6, 7, 8, 9]
    assert du.delete(arr, 20) == list(range(10))
    assert du.delete(arr, -1) == list(range(9))


def test_delete_negative_out_of_range():
    with pytest.raises(IndexError):
        du.delete([1, 2], -5)


def test_delete_at_updates_in_place():
    arr = [1, 2, 3]
    result = du.delete_at(arr, -1)
    assert arr == [1, 2]
    assert result is arr


def test_index_of():
    arr = list(range(10))
    assert du.index_of(3, *arr) == 3
    assert du.index_of(42, *arr) == -1


def test_delete_elems():
    assert du.delete_elems([1, 2, 1, 3], 1) == [2, 1, 3]
    assert du.delete_elems([1, 2, 1, 3, 2], 1, 2) == [1, 3, 2]
    assert du.delete_elems([1, 2]) == [1, 2]


def test_contain_and_contains():
    assert du.contain(2, 1, 2, 3) is True
    assert du.contain(5, 1, 2, 3) is False
    assert du.contains([1, 2, 3], 9, 3) is True
    assert du.contains([1, 2, 3], 9) is False


def test_duplicate():
    assert du.duplicate([1, 2, 1]) is True
    assert du.duplicate([1, 2, 3]) is False
    assert du.duplicate_any(["ab", "ac"], lambda s: s[0]) is True


def test_slice_to_map():
    @dataclass
    class Item:
        id: str
        name: str

    items = [Item("111", "111"), Item("222", "222"), Item("333", "333")]
    mapping = du.slice_to_map(items, lambda t: t.id)
    assert list(mapping) == ["111", "222", "333"]
    assert mapping["222"] is items[1]


def test_slice_to_map_variants():
    assert du.slice_to_map_any([1, 2], lambda x: (x, x * 10)) == {1: 10, 2: 20}
    assert du.slice_to_map_ok_any([1, 2, 3], lambda x: (x, -x, x != 2)) == {1: -1, 3: -3}
    assert du.slice_set_any(["a", "bb"], len) == {1, 2}
    assert du.slice_set([1, 1, 2]) == {1, 2}


def test_filter_map_and_convert():
    assert du.filter_map([1, 2, 3, 4], lambda x: (x * 2, x % 2 == 0)) == [4, 8]
    assert du.convert([1, 2], str) == ["1", "2"]


def test_has_key():
    assert du.has_key(None, "a") is False
    assert du.has_key({"a": 1}, "a") is True
    assert du.has_key({"a": 1}, "b") is False


def test_min_max():
    assert du.minimum(3, 1, 2) == 1
    assert du.maximum(3, 1, 2) == 3
    with pytest.raises(ValueError):
        du.minimum()
    with pytest.raises(ValueError):
        du.maximum()


def test_between():
    assert du.between(2, 1, 3) is True
    assert du.between(1, 1, 3) is False
    assert du.between_eq(3, 1, 3) is True
    assert du.between_leq(1, 1, 3) is True
    assert du.between_leq(3, 1, 3) is False
    assert du.between_req(3, 1, 3) is True
    assert du.between_req(1, 1, 3) is False


@pytest.mark.parametrize(
    "page, show, expected",
    [
        (1, 2, [1, 2]),
        (3, 2, [5]),
        (4, 2, []),
        (0, 2, []),
        (1, 0, []),
    ],
)
def test_paginate(page, show, expected):
    assert du.paginate([1, 2, 3, 4, 5], page, show) == expected


def test_both_exist():
    arr1 = [1, 1, 1, 4, 4, 5, 2, 3, 3, 3, 6]
    arr2 = [6, 1, 3]
    arr3 = [5, 1, 3, 6]
    assert sorted(du.both_exist(arr1, arr2, arr3)) == [1, 3, 6]
    assert du.both_exist() == []
    assert du.both_exist([1], []) == []


def test_complete():
    @dataclass
    class Item:
        id: int
        value: str

    ids = [1, 2, 3, 4, 5, 6, 7, 8]
    items = [Item(i, str(i * 1000)) for i in ids]
    du.delete_at(items, -1)
    du.delete_at(ids, -1)
    assert du.complete(ids, du.convert(items, lambda t: t.id)) is True
    assert du.complete([1, 2], [1, 3]) is False


def test_keys_values():
    mapping = {"a": 1, "b": 2}
    assert du.keys(mapping) == ["a", "b"]
    assert du.values(mapping) == [1, 2]


def test_sort_values():
    arr = [1, 1, 1, 4, 4, 5, 2, 3, 3, 3, 6]
    assert du.sort_values(arr, False) == [6, 5, 4, 4, 3, 3, 3, 2, 1, 1, 1]
    assert du.sort_values(arr, True) == [1, 1, 1, 2, 3, 3, 3, 4, 4, 5, 6]


def test_sort_any():
    words = ["ccc", "a", "bb"]
    du.sort_any(words, lambda a, b: len(a) < len(b))
    assert words == ["a", "bb", "ccc"]


def test_if_else_and_equal():
    assert du.if_else(True, "a", "b") == "a"
    assert du.if_else(False, "a", "b") == "b"
    assert du.equal([1, 2], [1, 2]) is True
    assert du.equal([1, 2], [2, 1]) is False
    assert du.equal([1], [1, 2]) is False


def test_single():
    assert sorted(du.single([1, 2, 2, 3], [3, 4])) == [1, 2, 4]
    assert du.single([1, 2], [2, 1]) == []


def test_order():
    ts = [("b", 1), ("a", 2), ("c", 3), ("a", 4)]
    result = du.order(["a", "b"], ts, lambda t: t[0])
    assert result == [("a", 2), ("a", 4), ("b", 1), ("c", 3)]
    assert du.order([], ts, lambda t: t[0]) == ts


def test_order_in_place():
    ts = [3, 1, 2]
    result = du.order_in_place([2, 1], ts, lambda t: t)
    assert ts == [2, 1, 3]
    assert result is ts


def test_unique_join():
    assert du.unique_join("a", "b") == '["a","b"]'
    assert du.unique_join() == "null"


@dataclass
class Req:
    group_id: str = ""
    group_name: str = ""
    notification: str = ""
    introduction: str = ""
    count: int = 0
    owner_user_id: str = ""


@dataclass
class Req11:
    group_id: Optional[str] = None
    group_name: Optional[str] = None
    notification: Optional[str] = None
    introduction: Optional[str] = None
    count: Optional[int] = None
    owner_user_id: Optional[str] = None


@dataclass
class Req1:
    re: Optional[list] = None
    re1: Optional[Req] = None
    re2: Req11 = field(default_factory=Req11)


@pytest.mark.parametrize(
    "req, resp, want",
    [
        (
            Req("groupID", "groupName", "notification", "introduction", 123, "ownerUserID"),
            Req("ID", "Name", "notification", "introduction", 456, "ownerUserID"),
            Req("groupID", "groupName", "notification", "introduction", 123, "ownerUserID"),
        ),
        (
            Req("groupID", "groupName", "", "", 123, "ownerUserID"),
            Req("ID", "Name", "notification", "introduction", 456, "ownerUserID"),
            Req("groupID", "groupName", "notification", "introduction", 123, "ownerUserID"),
        ),
    ],
)
def test_struct_field_not_nil_replace(req, resp, want):
    du.struct_field_not_nil_replace(resp, req)
    assert resp == want


def test_struct_field_not_nil_replace_nested():
    r = Req("groupID1", "groupName2", "1", "1", 123, "ownerUserID1")
    req = Req1(
        re=[
            Req("groupID1", "groupName2", "1", "1", 123, "ownerUserID1"),
            Req("groupID2", "groupName2", "2", "2", 456, "ownerUserID2"),
        ],
        re1=r,
        re2=Req11(r.group_id, r.group_name, r.notification, r.introduction, r.count, r.owner_user_id),
    )
    want = Req1(
        re=[
            Req("groupID1", "groupName2", "1", "1", 123, "ownerUserID1"),
            Req("groupID2", "groupName2", "2", "2", 456, "ownerUserID2"),
        ],
        re1=r,
        re2=Req11(r.group_id, r.group_name, r.notification, r.introduction, r.count, r.owner_user_id),
    )
    resp = Req1()
    du.struct_field_not_nil_replace(resp, req)
    assert resp == want
    assert resp.re[0] is not req.re[0]


def test_struct_field_not_nil_replace_list_keeps_dest_values():
    dest = Req1(re=[Req(group_id="old", notification="keep")])
    src = Req1(re=[Req(group_id="new")])
    du.struct_field_not_nil_replace(dest, src)
    assert dest.re == [Req(group_id="new", notification="keep")]


def test_batch():
    assert du.batch(str, [1, 2]) == ["1", "2"]
    assert du.batch(str, None) is None


def test_switch_options():
    assert du.get_switch_from_options(None, "x") is True
    assert du.get_switch_from_options({}, "x") is True
    assert du.get_switch_from_options({"x": False}, "x") is False
    options = {}
    du.set_switch_from_options(options, "x", False)
    assert options == {"x": False}


def test_copy_struct_fields():
    dest = Req()
    du.copy_struct_fields(dest, Req11(group_id="g", count=5))
    assert dest.group_id == "g"
    assert dest.count == 5
    assert dest.group_name is None
    target = {}
    du.copy_struct_fields(target, {"a": 1})
    assert target == {"a": 1}
    with pytest.raises(TypeError):
        du.copy_struct_fields(None, {"a": 1})


def test_copy_and_shuffle_slice():
    original = list(range(20))
    copied = du.copy_slice(original)
    assert copied == original
    copied.append(99)
    assert original == list(range(20))
    shuffled = du.shuffle_slice(original)
    assert sorted(shuffled) == original
    assert original == list(range(20))


def test_get_elem_by_index():
    assert du.get_elem_by_index([10, 20, 30], 1) == 20
    with pytest.raises(IndexError):
        du.get_elem_by_index([10, 20, 30], 3)
    with pytest.raises(IndexError):
        du.get_elem_by_index([10, 20, 30], -1)