import struct
import logging as lg
from typing import Sequence

from lc3vm.common.hwconf import MEMORY_SIZE, WORD_SIZE, WORD_MASK


class MachineError(Exception):
    pass


class OutOfBoundsLoad(MachineError):
    def __init__(self, offset: int, length: int):
        super().__init__(
            f'Block of {length} words at {offset:#06x} '
            f'does not fit into {MEMORY_SIZE} words of memory'
        )
        self.offset = offset
        self.length = length


class Memory():
    data: bytearray

    def __init__(self):
        self.data = bytearray(MEMORY_SIZE * WORD_SIZE)

    def read(self, addr: int) -> int:
        m = (addr & WORD_MASK) * WORD_SIZE
        (v,) = struct.unpack('>H', self.data[m:m + WORD_SIZE])
        return v

    def write(self, addr: int, value: int):
        m = (addr & WORD_MASK) * WORD_SIZE
        self.data[m:m + WORD_SIZE] = struct.pack('>H', value & WORD_MASK)

    def load(self, block: Sequence[int], offset: int):
        # Checked up front so a failed load leaves memory untouched
        if offset < 0 or offset + len(block) > MEMORY_SIZE:
            raise OutOfBoundsLoad(offset, len(block))

        m = offset * WORD_SIZE
        packed = struct.pack(f'>{len(block)}H', *[w & WORD_MASK for w in block])
        self.data[m:m + len(packed)] = packed

        lg.debug(f'Loaded {len(block)} words at {offset:04X}')

    def dump(self, start: int, count: int) -> list[int]:
        return [self.read(start + i) for i in range(count)]
