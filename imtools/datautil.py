"""Generic helpers for lists, sets, mappings and simple records."""

from __future__ import annotations

import copy
import dataclasses
import functools
import random
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Mapping, MutableMapping, Sequence
from typing import Any, TypeVar

from imtools.jsonutil import json_marshal

__all__ = [
    "slice_sub_funcs",
    "slice_intersect_funcs",
    "slice_sub_func",
    "slice_sub",
    "slice_sub_any",
    "slice_sub_convert_pre",
    "slice_any_sub",
    "distinct_any",
    "distinct_any_get_comparable",
    "distinct",
    "delete",
    "delete_at",
    "index_any",
    "index_of",
    "delete_elems",
    "contain",
    "contains",
    "duplicate_any",
    "duplicate",
    "slice_to_map_ok_any",
    "slice_to_map_any",
    "slice_to_map",
    "slice_set_any",
    "filter_map",
    "convert",
    "slice_set",
    "has_key",
    "minimum",
    "maximum",
    "between",
    "between_eq",
    "between_leq",
    "between_req",
    "paginate",
    "both_exist_any",
    "both_exist",
    "complete",
    "keys",
    "values",
    "sort_values",
    "sort_any",
    "if_else",
    "equal",
    "single",
    "order",
    "order_in_place",
    "unique_join",
    "struct_field_not_nil_replace",
    "batch",
    "get_switch_from_options",
    "set_switch_from_options",
    "copy_struct_fields",
    "copy_slice",
    "shuffle_slice",
    "get_elem_by_index",
]

T = TypeVar("T")
V = TypeVar("V")
K = TypeVar("K", bound=Hashable)


def _subtract(pairs: Iterable[tuple[Any, T]], excluded: set) -> list[T]:
    """Items whose key is not excluded, keeping the first item for each key."""
    seen: set = set()
    result = []
    for key, item in pairs:
        if key in seen or key in excluded:
            continue
        result.append(item)
        seen.add(key)
    return result


def _has_repeat(keys_seq: Iterable[Hashable]) -> bool:
    seen: set = set()
    for key in keys_seq:
        if key in seen:
            return True
        seen.add(key)
    return False


def _common(groups: list[dict]) -> list:
    """Values of the smallest mapping whose keys occur in every mapping."""
    if not groups or any(not group for group in groups):
        return []
    smallest = min(range(len(groups)), key=lambda position: len(groups[position]))
    others = [group for position, group in enumerate(groups) if position != smallest]
    return [
        item
        for key, item in groups[smallest].items()
        if all(key in group for group in others)
    ]


def slice_sub_funcs(
    a: Sequence[T], b: Sequence[V], fna: Callable[[T], K], fnb: Callable[[V], K]
) -> list[T]:
    """Items of ``a`` whose key is not a key of ``b``, without repeated keys."""
    if not b:
        return list(a)
    return _subtract(((fna(item), item) for item in a), {fnb(item) for item in b})


def slice_intersect_funcs(
    a: Sequence[T], b: Sequence[V], fna: Callable[[T], K], fnb: Callable[[V], K]
) -> list[T]:
    """Items of ``a`` whose key is also a key of ``b``, in ``a`` order."""
    if not b:
        return []
    present = {fnb(item) for item in b}
    return [item for item in a if fna(item) in present]


def slice_sub_func(a: Sequence[T], b: Sequence[T], fn: Callable[[T], K]) -> list[T]:
    return slice_sub_funcs(a, b, fn, fn)


def slice_sub(a: Sequence[K], b: Sequence[K]) -> list[K]:
    """Distinct items of ``a`` that are not in ``b``."""
    if not b:
        return list(a)
    return _subtract(((item, item) for item in a), set(b))


def slice_sub_any(a: Sequence[K], b: Sequence[V], fn: Callable[[V], K]) -> list[K]:
    """Distinct items of ``a`` not among ``fn`` applied to the items of ``b``."""
    return slice_sub(a, convert(b, fn))


def slice_sub_convert_pre(a: Sequence[T], b: Sequence[K], fn: Callable[[T], K]) -> list[T]:
    """Distinct-by-key items of ``a`` whose ``fn`` value is not in ``b``."""
    if not b:
        return list(a)
    return _subtract(((fn(item), item) for item in a), set(b))


def slice_any_sub(a: Sequence[T], b: Sequence[T], fn: Callable[[T], K]) -> list[T]:
    """Items of ``a`` whose key is not a key of ``b``, duplicates kept."""
    excluded = {fn(item) for item in b}
    return [item for item in a if fn(item) not in excluded]


def distinct_any(es: Iterable[T], fn: Callable[[T], K]) -> list[T]:
    """First item for each key, in original order."""
    seen: dict[K, T] = {}
    for item in es:
        seen.setdefault(fn(item), item)
    return list(seen.values())


def distinct_any_get_comparable(es: Iterable[T], fn: Callable[[T], K]) -> list[K]:
    """Distinct keys in order of first appearance."""
    return list(dict.fromkeys(fn(item) for item in es))


def distinct(ts: Sequence[K]) -> list[K]:
    if len(ts) < 2:
        return list(ts)
    if len(ts) == 2:
        return [ts[0]] if ts[0] == ts[1] else list(ts)
    return list(dict.fromkeys(ts))


def delete(es: Sequence[T], *args: int) -> list[T]:
    """Copy of ``es`` without the given positions; negative positions count from the end."""
    items = list(es)
    if not args:
        return items
    if len(args) == 1:
        index = args[0]
        if index < 0:
            index += len(items)
        if index >= len(items):
            return items
        if index < 0:
            raise IndexError(f"index {args[0]} out of range")
        return items[:index] + items[index + 1:]
    targets = {index + len(items) if index < 0 else index for index in args}
    return [item for position, item in enumerate(items) if position not in targets]


def delete_at(es: list[T], *args: int) -> list[T]:
    """Like :func:`delete`, but updates ``es`` in place and returns it."""
    es[:] = delete(es, *args)
    return es


def index_any(e: T, es: Sequence[T], fn: Callable[[T], K]) -> int:
    """Position of the first item with the same key as ``e``, or -1."""
    key = fn(e)
    return next((position for position, item in enumerate(es) if fn(item) == key), -1)


def index_of(e: T, *args: T) -> int:
    return next((position for position, item in enumerate(args) if item == e), -1)


def delete_elems(es: Sequence[K], *args: K) -> list[K]:
    """Copy of ``es`` with one occurrence removed for each value given."""
    remaining = Counter(args)
    result = []
    for item in es:
        if remaining[item] > 0:
            remaining[item] -= 1
            continue
        result.append(item)
    return result


def contain(e: T, *args: T) -> bool:
    return index_of(e, *args) >= 0


def contains(e: Iterable[K], *args: K) -> bool:
    """Whether any of ``args`` is in ``e``."""
    present = set(e)
    return any(item in present for item in args)


def duplicate_any(es: Iterable[T], fn: Callable[[T], K]) -> bool:
    return _has_repeat(fn(item) for item in es)


def duplicate(es: Iterable[K]) -> bool:
    return _has_repeat(es)


def slice_to_map_ok_any(es: Iterable[T], fn: Callable[[T], tuple[K, V, bool]]) -> dict[K, V]:
    """Mapping built from ``(key, value, keep)`` triples; later keys overwrite earlier ones."""
    result: dict[K, V] = {}
    for item in es:
        key, value, keep = fn(item)
        if keep:
            result[key] = value
    return result


def slice_to_map_any(es: Iterable[T], fn: Callable[[T], tuple[K, V]]) -> dict[K, V]:
    return dict(fn(item) for item in es)


def slice_to_map(es: Iterable[T], fn: Callable[[T], K]) -> dict[K, T]:
    return {fn(item): item for item in es}


def slice_set_any(es: Iterable[T], fn: Callable[[T], K]) -> set[K]:
    return {fn(item) for item in es}


def filter_map(es: Iterable[T], fn: Callable[[T], tuple[V, bool]]) -> list[V]:
    """Values of ``fn`` for which its second result is true."""
    result = []
    for item in es:
        value, keep = fn(item)
        if keep:
            result.append(value)
    return result


def convert(es: Iterable[T], fn: Callable[[T], V]) -> list[V]:
    return [fn(item) for item in es]


def slice_set(es: Iterable[K]) -> set[K]:
    return set(es)


def has_key(m: Mapping[K, Any] | None, k: K) -> bool:
    return m is not None and k in m


def minimum(*args: T) -> T:
    if not args:
        raise ValueError("minimum() needs at least one value")
    return min(args)


def maximum(*args: T) -> T:
    if not args:
        raise ValueError("maximum() needs at least one value")
    return max(args)


def between(data: Any, left: Any, right: Any) -> bool:
    return left < data < right


def between_eq(data: Any, left: Any, right: Any) -> bool:
    return left <= data <= right


def between_leq(data: Any, left: Any, right: Any) -> bool:
    return left <= data < right


def between_req(data: Any, left: Any, right: Any) -> bool:
    return left < data <= right


def paginate(es: Sequence[T], page_number: int, show_number: int) -> list[T]:
    """Items of the 1-based page ``page_number`` with ``show_number`` items per page."""
    if page_number <= 0 or show_number <= 0:
        return []
    start = (page_number - 1) * show_number
    if start >= len(es):
        return []
    return list(es[start:start + show_number])


def both_exist_any(es: Sequence[Sequence[T]], fn: Callable[[T], K]) -> list[T]:
    """Items whose key appears in every list, taken from the list with fewest keys."""
    return _common([{fn(item): item for item in items} for items in es])


def both_exist(*args: Sequence[K]) -> list[K]:
    return _common([{item: item for item in items} for items in args])


def complete(a: Sequence[K], b: Sequence[K]) -> bool:
    """Whether ``a`` and ``b`` hold the same distinct values, ignoring order."""
    return not single(a, b)


def keys(kv: Mapping[K, V]) -> list[K]:
    return list(kv.keys())


def values(kv: Mapping[K, V]) -> list[V]:
    return list(kv.values())


def sort_values(es: list[T], asc: bool) -> list[T]:
    """Sort ``es`` in place, ascending or descending, and return it."""
    es.sort(reverse=not asc)
    return es


def sort_any(es: list[T], fn: Callable[[T, T], bool]) -> None:
    """Sort ``es`` in place using ``fn(a, b)`` as the "a comes before b" test."""

    def compare(a: T, b: T) -> int:
        if fn(a, b):
            return -1
        if fn(b, a):
            return 1
        return 0

    es.sort(key=functools.cmp_to_key(compare))


def if_else(isa: bool, a: T, b: T) -> T:
    return a if isa else b


def equal(a: Sequence[T], b: Sequence[T]) -> bool:
    """Whether both sequences hold equal items in the same order."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def single(a: Sequence[K], b: Sequence[K]) -> list[K]:
    """Distinct values found in exactly one of ``a`` and ``b``."""
    counts: dict[K, int] = {}
    for item in (*distinct(a), *distinct(b)):
        counts[item] = counts.get(item, 0) + 1
    return [item for item, count in counts.items() if count == 1]


def order(es: Sequence[K], ts: Sequence[T], fn: Callable[[T], K]) -> list[T]:
    """Reorder ``ts`` so that items follow the key order of ``es``; unlisted keys go last."""
    if not es or not ts:
        return list(ts)
    groups: dict[K, list[T]] = {}
    for item in ts:
        groups.setdefault(fn(item), []).append(item)
    result: list[T] = []
    for key in es:
        result.extend(groups.pop(key, []))
    for group in groups.values():
        result.extend(group)
    return result


def order_in_place(es: Sequence[K], ts: list[T], fn: Callable[[T], K]) -> list[T]:
    ts[:] = order(es, ts, fn)
    return ts


def unique_join(*args: str) -> str:
    """JSON array of the given strings; "null" when none are given."""
    if not args:
        return "null"
    return json_marshal(list(args)).decode("utf-8")


def _field_names(obj: Any) -> list[str]:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [f.name for f in dataclasses.fields(obj)]
    try:
        return list(vars(obj))
    except TypeError:
        return []


def _is_record(value: Any) -> bool:
    if value is None or isinstance(value, (str, bytes, int, float, complex, list, tuple, dict, set)):
        return False
    return bool(_field_names(value))


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float, complex, str, bytes, list, tuple, dict, set, frozenset)):
        return not value
    if _is_record(value):
        return all(_is_zero(getattr(value, name)) for name in _field_names(value))
    return False


def _zero_of(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (bool, int, float, complex, str, bytes, list, tuple, dict, set, frozenset)):
        return type(value)()
    if _is_record(value):
        blank = copy.copy(value)
        for name in _field_names(blank):
            setattr(blank, name, _zero_of(getattr(value, name)))
        return blank
    return None


def struct_field_not_nil_replace(dest: Any, src: Any) -> None:
    """Copy every non-empty field of ``src`` onto ``dest``.

    List fields are always taken from ``src``; lists of records are rebuilt
    element by element, keeping ``dest``'s value wherever ``src``'s is empty.
    """
    for name in _field_names(dest):
        if name.startswith("_") or not hasattr(src, name):
            continue
        src_value = getattr(src, name)
        dest_value = getattr(dest, name)
        if isinstance(src_value, list) and (dest_value is None or isinstance(dest_value, list)):
            if src_value and all(_is_record(item) for item in src_value):
                rebuilt = []
                for position, src_item in enumerate(src_value):
                    fresh = _zero_of(src_item)
                    struct_field_not_nil_replace(fresh, src_item)
                    old = dest_value[position] if dest_value and position < len(dest_value) else None
                    if old is not None:
                        for field_name in _field_names(fresh):
                            if _is_zero(getattr(fresh, field_name)) and hasattr(old, field_name):
                                setattr(fresh, field_name, getattr(old, field_name))
                    rebuilt.append(fresh)
                setattr(dest, name, rebuilt)
            else:
                setattr(dest, name, src_value)
        elif not _is_zero(src_value):
            setattr(dest, name, src_value)


def batch(fn: Callable[[T], V], ts: Iterable[T] | None) -> list[V] | None:
    if ts is None:
        return None
    return [fn(item) for item in ts]


def get_switch_from_options(options: Mapping[str, bool] | None, key: str) -> bool:
    """A switch is on unless the options explicitly turn it off."""
    if options is None:
        return True
    return options.get(key, True)


def set_switch_from_options(options: MutableMapping[str, bool] | None, key: str, value: bool) -> None:
    """Set a switch; with no options mapping there is nothing to update."""
    if options is not None:
        options[key] = value


def copy_struct_fields(a: Any, b: Any) -> None:
    """Copy same-named fields (or keys) of ``b`` into ``a``."""
    if a is None or b is None:
        raise TypeError("copy source and destination must not be None")
    source = dict(b) if isinstance(b, Mapping) else {name: getattr(b, name) for name in _field_names(b)}
    if isinstance(a, MutableMapping):
        a.update(source)
        return
    targets = set(_field_names(a))
    for name, value in source.items():
        if name in targets:
            setattr(a, name, value)


def copy_slice(a: Iterable[T]) -> list[T]:
    return list(a)


def shuffle_slice(a: Iterable[T]) -> list[T]:
    """A shuffled copy of ``a``; the input is left untouched."""
    shuffled = list(a)
    random.Random().shuffle(shuffled)
    return shuffled


def get_elem_by_index(array: Sequence[int], index: int) -> int:
    if index < 0 or index >= len(array):
        raise IndexError(f"index out of range (index={index}, array={list(array)})")
    return array[index]