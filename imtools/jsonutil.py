"""JSON encoding with predictable, compact output."""

from __future__ import annotations

import base64
import dataclasses
import json
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

__all__ = [
    "RawJSON",
    "json_marshal",
    "json_unmarshal",
    "struct_to_json_string",
    "json_string_to_struct",
]

_HEX = "0123456789abcdef"


@dataclasses.dataclass(frozen=True)
class RawJSON:
    """An already encoded JSON document, embedded verbatim (compacted) when marshalled."""

    data: bytes

    def __post_init__(self) -> None:
        if isinstance(self.data, str):
            object.__setattr__(self, "data", self.data.encode("utf-8"))

    def __str__(self) -> str:
        return self.data.decode("utf-8")


def _escape_char(ch: str) -> str:
    code = ord(ch)
    return "\\u" + "".join(_HEX[(code >> shift) & 0xF] for shift in (12, 8, 4, 0))


def _encode_str(text: str) -> str:
    parts = ['"']
    for ch in text:
        if ch == '"':
            parts.append('\\"')
        elif ch == "\\":
            parts.append("\\\\")
        elif ch == "\n":
            parts.append("\\n")
        elif ch == "\r":
            parts.append("\\r")
        elif ch == "\t":
            parts.append("\\t")
        elif ord(ch) < 0x20 or ch in "<>&\u2028\u2029":
            parts.append(_escape_char(ch))
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


def _encode_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"json: unsupported value: {value!r}")
    number = Decimal(repr(value)).normalize()
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        sign, digits, exponent = number.as_tuple()
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(str(d) for d in digits[1:])
        exp10 = exponent + len(digits) - 1
        prefix = "-" if sign else ""
        return f"{prefix}{mantissa}e{'+' if exp10 >= 0 else '-'}{abs(exp10)}"
    return format(number, "f")


def _compact(text: str) -> str:
    out = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            if ch in "<>&\u2028\u2029":
                out.append(_escape_char(ch))
            else:
                out.append(ch)
        elif ch in " \t\n\r":
            continue
        else:
            out.append(ch)
            if ch == '"':
                in_string = True
    return "".join(out)


def _map_key(key: Any) -> str:
    if isinstance(key, bool):
        raise TypeError(f"json: unsupported map key type: {type(key).__name__}")
    if isinstance(key, str):
        return key
    if isinstance(key, int):
        return str(key)
    raise TypeError(f"json: unsupported map key type: {type(key).__name__}")


def _encode(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _encode_float(value)
    if isinstance(value, str):
        return _encode_str(value)
    if isinstance(value, RawJSON):
        text = value.data.decode("utf-8")
        try:
            json.loads(text)
        except ValueError as exc:
            raise ValueError(f"json: invalid raw message: {exc}") from exc
        return _compact(text)
    if isinstance(value, (bytes, bytearray)):
        return _encode_str(base64.b64encode(bytes(value)).decode("ascii"))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        members = [
            f"{_encode_str(field.name)}:{_encode(getattr(value, field.name))}"
            for field in dataclasses.fields(value)
            if not field.name.startswith("_")
        ]
        return "{" + ",".join(members) + "}"
    if isinstance(value, Mapping):
        items = sorted((_map_key(k), v) for k, v in value.items())
        return "{" + ",".join(f"{_encode_str(k)}:{_encode(v)}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_encode(item) for item in value) + "]"
    raise TypeError(f"json: unsupported type: {type(value).__name__}")


def json_marshal(v: Any) -> bytes:
    """Encode ``v`` as compact JSON with sorted map keys and HTML-safe strings."""
    return _encode(v).encode("utf-8")


def json_unmarshal(data: bytes | str) -> Any:
    """Decode a JSON document; raises ValueError when it is malformed."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    return json.loads(data)


def struct_to_json_string(param: Any) -> str:
    """Encode ``param`` as a JSON string, or return an empty string if it cannot be encoded."""
    try:
        return json_marshal(param).decode("utf-8")
    except (TypeError, ValueError):
        return ""


def json_string_to_struct(s: str) -> Any:
    """Decode a JSON string into Python values."""
    return json.loads(s)