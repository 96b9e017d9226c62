import pytest

from patria.protocol import WsErrorCode, error_name


@pytest.mark.parametrize(
    "code, expected",
    [
        (WsErrorCode.OK, "WS_OK"),
        (WsErrorCode.RESERVED_BITS_SET, "WS_RESERVED_BITS_SET"),
        (WsErrorCode.INVALID_OPCODE, "WS_INVALID_OPCODE"),
        (WsErrorCode.INVALID_CONTINUATION, "WS_INVALID_CONTINUATION"),
        (WsErrorCode.CONTROL_TOO_LONG, "WS_CONTROL_TOO_LONG"),
        (WsErrorCode.NON_CANONICAL_LENGTH, "WS_NON_CANONICAL_LENGTH"),
        (WsErrorCode.FRAGMENTED_CONTROL, "WS_FRAGMENTED_CONTROL"),
    ],
)
def test_error_name_for_known_codes(code, expected):
    assert error_name(code) == expected


def test_error_name_accepts_plain_int():
    assert error_name(int(WsErrorCode.INVALID_CONTINUATION)) == "WS_INVALID_CONTINUATION"


def test_invalid_data_has_no_name():
    assert error_name(WsErrorCode.INVALID_DATA) is None


@pytest.mark.parametrize("code", [-1, 99, 1000])
def test_unknown_code_has_no_name(code):
    assert error_name(code) is None