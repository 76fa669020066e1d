import struct
from typing import Sequence

import lc3vm.runtime.cpu as cpu
from lc3vm.common.hwconf import PC_START


# Instruction word builders for hand-written test programs

def bits(value: int, width: int) -> int:
    return value & ((1 << width) - 1)


def br(mask: int, offset: int) -> int:
    return (0x0 << 12) | (mask << 9) | bits(offset, 9)


def add(dr: int, sr1: int, sr2: int) -> int:
    return (0x1 << 12) | (dr << 9) | (sr1 << 6) | sr2


def addi(dr: int, sr1: int, imm5: int) -> int:
    return (0x1 << 12) | (dr << 9) | (sr1 << 6) | 0x20 | bits(imm5, 5)


def ld(dr: int, offset: int) -> int:
    return (0x2 << 12) | (dr << 9) | bits(offset, 9)


def st(sr: int, offset: int) -> int:
    return (0x3 << 12) | (sr << 9) | bits(offset, 9)


def jsr(offset: int) -> int:
    return (0x4 << 12) | 0x0800 | bits(offset, 11)


def jsrr(base: int) -> int:
    return (0x4 << 12) | (base << 6)


def band(dr: int, sr1: int, sr2: int) -> int:
    return (0x5 << 12) | (dr << 9) | (sr1 << 6) | sr2


def bandi(dr: int, sr1: int, imm5: int) -> int:
    return (0x5 << 12) | (dr << 9) | (sr1 << 6) | 0x20 | bits(imm5, 5)


def ldr(dr: int, base: int, offset: int) -> int:
    return (0x6 << 12) | (dr << 9) | (base << 6) | bits(offset, 6)


def streg(sr: int, base: int, offset: int) -> int:
    return (0x7 << 12) | (sr << 9) | (base << 6) | bits(offset, 6)


def inv(dr: int, sr: int) -> int:
    return (0x9 << 12) | (dr << 9) | (sr << 6) | 0x3F


def ldi(dr: int, offset: int) -> int:
    return (0xA << 12) | (dr << 9) | bits(offset, 9)


def sti(sr: int, offset: int) -> int:
    return (0xB << 12) | (sr << 9) | bits(offset, 9)


def jmp(base: int) -> int:
    return (0xC << 12) | (base << 6)


def lea(dr: int, offset: int) -> int:
    return (0xE << 12) | (dr << 9) | bits(offset, 9)


def trap(vector: int) -> int:
    return (0xF << 12) | bits(vector, 8)


def machine_with(program: Sequence[int], origin: int = PC_START) -> cpu.Machine:
    proc = cpu.Machine()
    proc.load(program, origin)
    proc.registers.pc = origin
    return proc


def run_steps(proc: cpu.Machine, count: int) -> list:
    return [proc.step() for _ in range(count)]


def make_image(program: Sequence[int], origin: int = PC_START) -> bytes:
    words = [origin, *program]
    return struct.pack(f'>{len(words)}H', *words)
