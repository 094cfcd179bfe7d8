import time

from imtools import idutil

_HEX = set("0123456789abcdefABCDEF")


def test_get_msg_id_by_md5_is_md5_hex():
    msg_id = idutil.get_msg_id_by_md5("12345")
    assert len(msg_id) == 32
    assert set(msg_id) <= _HEX


def test_get_msg_id_by_md5_varies():
    ids = {idutil.get_msg_id_by_md5("12345") for _ in range(5)}
    assert len(ids) == 5


def test_operation_id_generator_is_long_number():
    before = time.time_ns()
    op_id = idutil.operation_id_generator()
    after = time.time_ns()
    assert op_id.isdigit()
    assert len(op_id) >= 13
    assert before <= int(op_id) <= after + 2**32