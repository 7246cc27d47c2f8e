import pytest

from procsys.procfile import (
    NotFoundError,
    ParseError,
    ProcError,
    read_file,
    read_value,
    write_value,
)


def test_read_file_returns_whole_text(tmp_path):
    target = tmp_path / "value"
    target.write_text("  42\n")
    assert read_file(target) == "  42\n"


def test_read_value_strips_and_parses(tmp_path):
    target = tmp_path / "value"
    target.write_text("  42\n")
    assert read_value(target, int) == 42


def test_read_value_with_string_parser(tmp_path):
    target = tmp_path / "status"
    target.write_text("enabled\n")
    assert read_value(target, str) == "enabled"


def test_read_value_parse_failure(tmp_path):
    target = tmp_path / "value"
    target.write_text("not-a-number\n")
    with pytest.raises(ParseError) as info:
        read_value(target, int)
    assert info.value.path == target
    assert isinstance(info.value, ValueError)


def test_read_missing_file(tmp_path):
    with pytest.raises(NotFoundError):
        read_file(tmp_path / "missing")


def test_read_directory_is_generic_error(tmp_path):
    with pytest.raises(ProcError) as info:
        read_file(tmp_path)
    assert not isinstance(info.value, NotFoundError)


def test_read_invalid_utf8(tmp_path):
    target = tmp_path / "bad"
    target.write_bytes(b"\xff\xfe")
    with pytest.raises(ParseError):
        read_file(target)


def test_write_value_writes_text(tmp_path):
    target = tmp_path / "value"
    target.write_text("")
    write_value(target, 1024)
    assert target.read_text() == "1024"


def test_write_value_round_trip(tmp_path):
    target = tmp_path / "value"
    target.write_text("")
    write_value(target, 77)
    assert read_value(target, int) == 77


def test_write_value_does_not_create(tmp_path):
    target = tmp_path / "missing"
    with pytest.raises(NotFoundError):
        write_value(target, 1)
    assert not target.exists()