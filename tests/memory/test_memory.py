import pytest

from lc3vm.runtime.memory import Memory, OutOfBoundsLoad, MachineError
from lc3vm.common.hwconf import MEMORY_SIZE


def test_zero_initialized():
    mem = Memory()
    assert mem.read(0x0000) == 0
    assert mem.read(0x3000) == 0
    assert mem.read(0xFFFF) == 0


def test_read_write():
    mem = Memory()
    mem.write(0x1234, 0xBEEF)
    assert mem.read(0x1234) == 0xBEEF
    assert mem.read(0x1233) == 0
    assert mem.read(0x1235) == 0


def test_write_masks_value():
    mem = Memory()
    mem.write(0x10, 0x12345)
    assert mem.read(0x10) == 0x2345

    mem.write(0x11, -1)
    assert mem.read(0x11) == 0xFFFF


def test_address_wraps():
    mem = Memory()
    mem.write(0x10000, 7)
    assert mem.read(0x0000) == 7

    mem.write(-1, 9)
    assert mem.read(0xFFFF) == 9


def test_load_block():
    mem = Memory()
    mem.load([1, 2, 3], 0x3000)
    assert mem.dump(0x2FFF, 5) == [0, 1, 2, 3, 0]


def test_load_up_to_last_word():
    mem = Memory()
    mem.load([0xAAAA, 0xBBBB], MEMORY_SIZE - 2)
    assert mem.read(0xFFFE) == 0xAAAA
    assert mem.read(0xFFFF) == 0xBBBB


def test_load_empty_block():
    mem = Memory()
    mem.load([], MEMORY_SIZE)
    assert mem.read(0xFFFF) == 0


def test_load_out_of_bounds_is_all_or_nothing():
    mem = Memory()
    mem.write(0xFFFE, 0x1111)
    mem.write(0xFFFF, 0x2222)
    mem.write(0x0000, 0x3333)

    with pytest.raises(OutOfBoundsLoad) as excinfo:
        mem.load([5, 6, 7], 0xFFFE)

    assert excinfo.value.offset == 0xFFFE
    assert excinfo.value.length == 3

    assert mem.read(0xFFFE) == 0x1111
    assert mem.read(0xFFFF) == 0x2222
    assert mem.read(0x0000) == 0x3333


def test_out_of_bounds_is_machine_error():
    mem = Memory()

    with pytest.raises(MachineError):
        mem.load([0] * (MEMORY_SIZE + 1), 0)
