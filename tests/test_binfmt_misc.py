import pytest

from procsys import binfmt_misc
from procsys.binfmt_misc import (
    BinFmtEntry,
    BinFmtFlags,
    ExtensionData,
    MagicData,
    enabled,
    entries,
    parse_hex,
)
from procsys.procfile import NotFoundError, ParseError

QEMU_ENTRY = """enabled
interpreter /usr/bin/qemu-riscv64-static
flags: OCF
offset 12
magic 7f454c460201010000000000000000000200f300
mask ffffffffffffff00fffffffffffffffffeffffff"""

HELLO_ENTRY = """enabled
interpreter /bin/hello
flags:
extension .hello"""

EXPECTED_MAGIC = bytes(
    [
        0x7F, 0x45, 0x4C, 0x46, 0x02, 0x01, 0x01, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x00, 0x00, 0x00, 0x02, 0x00, 0xF3, 0x00,
    ]
)


def test_parse_magic():
    data = parse_hex("7f454c460201010000000000000000000200f300")
    assert len(data) == 20
    assert data[0] == 0x7F
    assert data[1] == 0x45


@pytest.mark.parametrize("text", ["a", "zz", "0g"])
def test_parse_hex_errors(text):
    with pytest.raises(ParseError):
        parse_hex(text)


def test_parse_hex_empty():
    assert parse_hex("") == b""


def test_flags_parsing():
    assert BinFmtFlags.parse("") == BinFmtFlags(0)
    assert BinFmtFlags.parse("F") == BinFmtFlags.F
    assert BinFmtFlags.parse("OCF") == BinFmtFlags.F | BinFmtFlags.C | BinFmtFlags.O


def test_flags_ignore_unknown_characters():
    assert BinFmtFlags.parse(" P x") == BinFmtFlags.P


def test_magic_entry():
    entry = BinFmtEntry.from_string("test", QEMU_ENTRY)
    assert entry.name == "test"
    assert entry.flags == BinFmtFlags.F | BinFmtFlags.C | BinFmtFlags.O
    assert entry.enabled
    assert entry.interpreter == "/usr/bin/qemu-riscv64-static"
    assert isinstance(entry.data, MagicData)
    assert entry.data.offset == 12
    assert len(entry.data.magic) == len(entry.data.mask)
    assert entry.data.magic == EXPECTED_MAGIC


def test_extension_entry():
    entry = BinFmtEntry.from_string("test", HELLO_ENTRY)
    assert entry.flags == BinFmtFlags(0)
    assert entry.enabled
    assert entry.interpreter == "/bin/hello"
    assert entry.data == ExtensionData("hello")


def test_missing_mask_is_filled():
    entry = BinFmtEntry.from_string("x", "disabled\nmagic 0102\n")
    assert not entry.enabled
    assert entry.data == MagicData(offset=0, magic=b"\x01\x02", mask=b"\xff\xff")


def test_bad_offset():
    with pytest.raises(ParseError):
        BinFmtEntry.from_string("x", "offset 256\n")


def test_enabled_reads_status(tmp_path, monkeypatch):
    monkeypatch.setattr(binfmt_misc, "BINFMT_ROOT", tmp_path)
    (tmp_path / "status").write_text("enabled\n")
    assert enabled() is True
    (tmp_path / "status").write_text("disabled\n")
    assert enabled() is False


def test_enabled_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(binfmt_misc, "BINFMT_ROOT", tmp_path / "absent")
    with pytest.raises(NotFoundError):
        enabled()


def test_entries_skip_control_files(tmp_path, monkeypatch):
    monkeypatch.setattr(binfmt_misc, "BINFMT_ROOT", tmp_path)
    (tmp_path / "status").write_text("enabled\n")
    (tmp_path / "register").write_text("")
    (tmp_path / "qemu").write_text(QEMU_ENTRY)
    (tmp_path / "hello").write_text(HELLO_ENTRY)
    found = entries()
    assert [entry.name for entry in found] == ["hello", "qemu"]
    assert found[0].data == ExtensionData("hello")
    assert found[1].data.magic == EXPECTED_MAGIC


def test_entries_missing_directory(tmp_path, monkeypatch):
    monkeypatch.setattr(binfmt_misc, "BINFMT_ROOT", tmp_path / "absent")
    with pytest.raises(NotFoundError):
        entries()