from dataclasses import dataclass

import lc3vm.common.ops as ops
from lc3vm.common.hwconf import WORD_MASK, SIGN_BIT, R_LINK


def sign_extend(value: int, bits: int) -> int:
    value &= (1 << bits) - 1

    if value & (1 << (bits - 1)):
        value |= WORD_MASK << bits

    return value & WORD_MASK


def to_signed(value: int) -> int:
    value &= WORD_MASK
    return value - (1 << 16) if value & SIGN_BIT else value


def field(word: int, hi: int, lo: int) -> int:
    return (word >> lo) & ((1 << (hi - lo + 1)) - 1)


def reg(idx: int) -> str:
    return f'R{idx}'


def imm(value: int) -> str:
    return f'#{to_signed(value)}'


@dataclass(frozen=True)
class Instruction:
    OPCODE = -1

    # Data-producing instructions refresh COND from the written register
    SETS_FLAGS = False

    def mnemonic(self) -> str:
        return ops.MNEMONICS[self.OPCODE]


@dataclass(frozen=True)
class Branch(Instruction):
    OPCODE = ops.BR

    mask: int
    offset: int

    def __str__(self) -> str:
        flags = ''.join([
            'n' if self.mask & 0b100 else '',
            'z' if self.mask & 0b010 else '',
            'p' if self.mask & 0b001 else ''
        ])

        return f'BR{flags} {imm(self.offset)}'


@dataclass(frozen=True)
class Add(Instruction):
    OPCODE = ops.ADD
    SETS_FLAGS = True

    dr: int
    sr1: int
    sr2: int

    def __str__(self) -> str:
        return f'{self.mnemonic()} {reg(self.dr)}, {reg(self.sr1)}, {reg(self.sr2)}'


@dataclass(frozen=True)
class AddImmediate(Instruction):
    OPCODE = ops.ADD
    SETS_FLAGS = True

    dr: int
    sr1: int
    imm5: int

    def __str__(self) -> str:
        return f'{self.mnemonic()} {reg(self.dr)}, {reg(self.sr1)}, {imm(self.imm5)}'


@dataclass(frozen=True)
class And(Add):
    OPCODE = ops.AND


@dataclass(frozen=True)
class AndImmediate(AddImmediate):
    OPCODE = ops.AND


@dataclass(frozen=True)
class Load(Instruction):
    OPCODE = ops.LD
    SETS_FLAGS = True

    dr: int
    offset: int

    def __str__(self) -> str:
        return f'{self.mnemonic()} {reg(self.dr)}, {imm(self.offset)}'


@dataclass(frozen=True)
class LoadIndirect(Load):
    OPCODE = ops.LDI


@dataclass(frozen=True)
class LoadEffectiveAddress(Load):
    OPCODE = ops.LEA


@dataclass(frozen=True)
class Store(Instruction):
    OPCODE = ops.ST

    sr: int
    offset: int

    def __str__(self) -> str:
        return f'{self.mnemonic()} {reg(self.sr)}, {imm(self.offset)}'


@dataclass(frozen=True)
class StoreIndirect(Store):
    OPCODE = ops.STI


@dataclass(frozen=True)
class LoadRegister(Instruction):
    OPCODE = ops.LDR
    SETS_FLAGS = True

    dr: int
    base: int
    offset: int

    def __str__(self) -> str:
        return f'{self.mnemonic()} {reg(self.dr)}, {reg(self.base)}, {imm(self.offset)}'


@dataclass(frozen=True)
class StoreRegister(Instruction):
    OPCODE = ops.STR

    sr: int
    base: int
    offset: int

    def __str__(self) -> str:
        return f'{self.mnemonic()} {reg(self.sr)}, {reg(self.base)}, {imm(self.offset)}'


@dataclass(frozen=True)
class JumpRegister(Instruction):
    OPCODE = ops.JSR

    relative: bool  # bit 11: PC + offset when set, base register otherwise
    base: int
    offset: int

    def __str__(self) -> str:
        if self.relative:
            return f'JSR {imm(self.offset)}'

        return f'JSRR {reg(self.base)}'


@dataclass(frozen=True)
class Jump(Instruction):
    OPCODE = ops.JMP

    base: int

    def __str__(self) -> str:
        if self.base == R_LINK:
            return 'RET'

        return f'JMP {reg(self.base)}'


@dataclass(frozen=True)
class Not(Instruction):
    OPCODE = ops.NOT
    SETS_FLAGS = True

    dr: int
    sr: int

    def __str__(self) -> str:
        return f'NOT {reg(self.dr)}, {reg(self.sr)}'


@dataclass(frozen=True)
class Trap(Instruction):
    OPCODE = ops.TRAP

    vector: int

    def __str__(self) -> str:
        return f'TRAP x{self.vector:02X}'


@dataclass(frozen=True)
class Unused(Instruction):
    OPCODE = ops.RTI

    word: int

    def __str__(self) -> str:
        return f'.FILL x{self.word:04X} ; unused opcode'


@dataclass(frozen=True)
class Reserved(Unused):
    OPCODE = ops.RES

    def __str__(self) -> str:
        return f'.FILL x{self.word:04X} ; reserved opcode'


def decode_arithm(word: int, reg_form: type, imm_form: type) -> Instruction:
    dr = field(word, 11, 9)
    sr1 = field(word, 8, 6)

    if word & 0x0020:
        return imm_form(dr, sr1, sign_extend(word, 5))

    return reg_form(dr, sr1, field(word, 2, 0))


def decode_jsr(word: int) -> Instruction:
    if word & 0x0800:
        return JumpRegister(True, 0, sign_extend(word, 11))

    return JumpRegister(False, field(word, 8, 6), 0)


DECODERS = {
    ops.BR: lambda w: Branch(field(w, 11, 9), sign_extend(w, 9)),
    ops.ADD: lambda w: decode_arithm(w, Add, AddImmediate),
    ops.LD: lambda w: Load(field(w, 11, 9), sign_extend(w, 9)),
    ops.ST: lambda w: Store(field(w, 11, 9), sign_extend(w, 9)),
    ops.JSR: decode_jsr,
    ops.AND: lambda w: decode_arithm(w, And, AndImmediate),
    ops.LDR: lambda w: LoadRegister(field(w, 11, 9), field(w, 8, 6), sign_extend(w, 6)),
    ops.STR: lambda w: StoreRegister(field(w, 11, 9), field(w, 8, 6), sign_extend(w, 6)),
    ops.RTI: lambda w: Unused(w),
    ops.NOT: lambda w: Not(field(w, 11, 9), field(w, 8, 6)),
    ops.LDI: lambda w: LoadIndirect(field(w, 11, 9), sign_extend(w, 9)),
    ops.STI: lambda w: StoreIndirect(field(w, 11, 9), sign_extend(w, 9)),
    ops.JMP: lambda w: Jump(field(w, 8, 6)),
    ops.RES: lambda w: Reserved(w),
    ops.LEA: lambda w: LoadEffectiveAddress(field(w, 11, 9), sign_extend(w, 9)),
    ops.TRAP: lambda w: Trap(field(w, 7, 0))
}


def decode(word: int) -> Instruction:
    word &= WORD_MASK
    return DECODERS[word >> 12](word)
