"""String, number and list helpers."""

from __future__ import annotations

import re
import sys
import zlib
from typing import Any, Hashable, Iterable, Sequence, TypeVar

from imtools.jsonutil import json_marshal

T = TypeVar("T", bound=Hashable)

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def _parse_int64(s: str) -> int:
    if not _DECIMAL_RE.fullmatch(s):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(s)))


def int_to_string(i: int) -> str:
    return str(int(i))


def string_to_int(s: str) -> int:
    """Parse a decimal integer; malformed input gives 0, out-of-range input is clamped."""
    return _parse_int64(s)


def string_to_int64(s: str) -> int:
    return _parse_int64(s)


def string_to_int32(s: str) -> int:
    """Parse as a 64-bit integer, then truncate to 32 bits with wrap-around."""
    value = _parse_int64(s)
    return ((value + (1 << 31)) % (1 << 32)) - (1 << 31)


def int32_to_string(i: int) -> str:
    return str(int(i))


def uint32_to_string(i: int) -> str:
    return str(int(i))


def int64_to_string(i: int) -> str:
    return str(int(i))


def is_contain(target: str, items: Iterable[str]) -> bool:
    return target in items


def is_contain_int32(target: int, items: Iterable[int]) -> bool:
    return target in items


def is_contain_int(target: int, items: Iterable[int]) -> bool:
    return target in items


def interface_array_to_string_array(data: Iterable[Any]) -> list[str]:
    """Return the items as strings; raises TypeError if any item is not a string."""
    result = []
    for item in data:
        if not isinstance(item, str):
            raise TypeError(f"expected str, got {type(item).__name__}")
        result.append(item)
    return result


def struct_to_json_bytes(param: Any) -> bytes:
    """Encode ``param`` as JSON bytes, or return empty bytes if it cannot be encoded."""
    try:
        return json_marshal(param)
    except (TypeError, ValueError):
        return b""


def remove_duplicate_element(id_list: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(id_list))


def remove_duplicate(arr: Iterable[T]) -> list[T]:
    return list(dict.fromkeys(arr))


def is_duplicate_string_slice(arr: Iterable[str]) -> bool:
    seen: set[str] = set()
    for item in arr:
        if item in seen:
            return True
        seen.add(item)
    return False


def get_self_func_name() -> str:
    """Return the name of the function that calls this one."""
    return sys._getframe(1).f_code.co_name


def get_func_name(skip: int = 0) -> str:
    """Return the name of the function ``skip`` frames above the caller, or "" if none."""
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return ""
    return frame.f_code.co_name


def intersect_string(slice1: Sequence[str], slice2: Sequence[str]) -> list[str]:
    """Items of ``slice2`` that are also in ``slice1``, in ``slice2`` order."""
    present = set(slice1)
    return [v for v in slice2 if v in present]


def difference_string(slice1: Sequence[str], slice2: Sequence[str]) -> list[str]:
    """Items of either slice not in their intersection: ``slice1`` first, then ``slice2``."""
    common = set(intersect_string(slice1, slice2))
    return [v for v in slice1 if v not in common] + [v for v in slice2 if v not in common]


def intersect(slice1: Sequence[int], slice2: Sequence[int]) -> list[int]:
    present = set(slice1)
    return [v for v in slice2 if v in present]


def difference(slice1: Sequence[int], slice2: Sequence[int]) -> list[int]:
    common = set(intersect(slice1, slice2))
    return [v for v in slice1 if v not in common] + [v for v in slice2 if v not in common]


def get_hash_code(s: str) -> int:
    """CRC-32 (IEEE) checksum of the UTF-8 encoded string."""
    return zlib.crc32(s.encode("utf-8"))


def format_string(text: str, length: int, align_left: bool) -> str:
    """Pad ``text`` to ``length`` (left or right aligned), truncating it if longer."""
    if length < 0:
        raise ValueError("length must not be negative")
    if len(text) > length:
        return text[:length]
    return text.ljust(length) if align_left else text.rjust(length)


def _single_case(ch: str, converted: str) -> str:
    return converted if len(converted) == 1 else ch


def camel_case_to_space_separated(text: str) -> str:
    parts = []
    for position, ch in enumerate(text):
        if ch.isupper() and position > 0:
            parts.append(" ")
        parts.append(_single_case(ch, ch.lower()))
    return "".join(parts)


def upper_first(text: str) -> str:
    if not text:
        return text
    return _single_case(text[0], text[0].upper()) + text[1:]


def lower_first(text: str) -> str:
    if not text:
        return text
    return _single_case(text[0], text[0].lower()) + text[1:]


def is_alphanumeric(s: str) -> bool:
    return all(ch.isalpha() or ch.isdecimal() for ch in s)


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None