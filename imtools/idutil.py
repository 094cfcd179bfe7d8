"""Message and operation identifier generation."""

from __future__ import annotations

import random
import time

from imtools.encrypt import md5
from imtools.stringutil import int64_to_string
from imtools.timeutil import get_current_timestamp_by_nano

__all__ = ["get_msg_id_by_md5", "operation_id_generator"]


def get_msg_id_by_md5(send_id: str) -> str:
    """Hex MD5 of the current time, the sender ID and a random number."""
    stamp = int64_to_string(get_current_timestamp_by_nano())
    salt = int64_to_string(random.randrange(get_current_timestamp_by_nano()))
    return md5(stamp + send_id + salt)


def operation_id_generator() -> str:
    """Decimal string of the current nanosecond time plus a random 32-bit number."""
    return str(time.time_ns() + random.getrandbits(32))