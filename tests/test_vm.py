import pytest

from procsys import vm
from procsys.procfile import NotFoundError, ParseError, read_value
from procsys.vm import DropCache


@pytest.fixture
def vm_root(tmp_path, monkeypatch):
    monkeypatch.setattr(vm, "VM_ROOT", tmp_path)
    return tmp_path


@pytest.mark.parametrize("value", range(5))
def test_drop_cache_round_trip(value):
    text = str(value)
    assert str(DropCache.parse(text)) == text


def test_drop_cache_unknown_value():
    with pytest.raises(ParseError, match="Unknown drop cache value"):
        DropCache.parse("5")


def test_drop_cache_not_a_number():
    with pytest.raises(ParseError, match="Fail to parse drop cache"):
        DropCache.parse("all")


def test_admin_reserve_kbytes(vm_root):
    (vm_root / "admin_reserve_kbytes").write_text("8192\n")
    assert vm.admin_reserve_kbytes() == 8192


def test_set_admin_reserve_kbytes(vm_root):
    (vm_root / "admin_reserve_kbytes").write_text("")
    vm.set_admin_reserve_kbytes(4096)
    assert vm.admin_reserve_kbytes() == 4096


def test_compact_memory(vm_root):
    path = vm_root / "compact_memory"
    path.write_text("")
    assert vm.compact_memory() is None
    assert read_value(path, int) == 1
    assert path.read_text() == "1"


def test_drop_caches(vm_root):
    path = vm_root / "drop_caches"
    path.write_text("")
    assert vm.drop_caches(DropCache.ALL) is None
    assert read_value(path, DropCache.parse) is DropCache.ALL
    assert path.read_text() == "3"


def test_max_map_count_round_trip(vm_root):
    (vm_root / "max_map_count").write_text("")
    vm.set_max_map_count(65530)
    assert vm.max_map_count() == 65530


def test_missing_file(vm_root):
    with pytest.raises(NotFoundError):
        vm.max_map_count()