import pytest

from patria.json_parser import JsonFieldParser, JsonFormatError, format_row, format_two_rows


def test_simple_row():
    parser = JsonFieldParser('{"name": "value"}')
    assert parser.next_field() == ("name", "value")


def test_complex_row_name():
    parser = JsonFieldParser('{"name": "value"val\\str  . , :"}')
    name, value = parser.next_field()
    assert name == "name"
    assert value == "value"


def test_successive_fields():
    parser = JsonFieldParser('{"login": "alice", "password": "password"}')
    assert parser.next_field() == ("login", "alice")
    assert parser.next_field() == ("password", "password")
    with pytest.raises(JsonFormatError):
        parser.next_field()


def test_escaped_quote_stays_in_value():
    parser = JsonFieldParser(r'{"msg": "say \"hi\""}')
    assert parser.next_field() == ("msg", r"say \"hi\"")


def test_even_backslashes_close_value():
    parser = JsonFieldParser(r'{"path": "a\\", "next": "b"}')
    assert parser.next_field() == ("path", r"a\\")
    assert parser.next_field() == ("next", "b")


def test_empty_value():
    parser = JsonFieldParser('{"k": ""}')
    assert parser.next_field() == ("k", "")


@pytest.mark.parametrize(
    "text",
    ["", "{}", '{"name', '{"name": value}', '{"name": "unterminated'],
)
def test_malformed_input(text):
    with pytest.raises(JsonFormatError):
        JsonFieldParser(text).next_field()


def test_format_row():
    assert format_row("login", "SUCCESS") == '{"login": "SUCCESS"}'


def test_format_two_rows():
    text = format_two_rows("send_message", "hello", "sender_login", "alice")
    assert text == '{"send_message": "hello", "sender_login": "alice"}'


def test_format_row_parses_back():
    parser = JsonFieldParser(format_two_rows("a", "1", "b", "2"))
    assert parser.next_field() == ("a", "1")
    assert parser.next_field() == ("b", "2")