import logging as lg

from lc3vm.common.hwconf import (
    GP_REGS, R_PC, R_COND, REGISTER_COUNT, WORD_MASK, SIGN_BIT,
    FL_POS, FL_ZRO, FL_NEG
)


class Registers():
    values: list[int]

    def __init__(self):
        # PC and COND start at zero too; callers set the entry point
        self.values = [0] * REGISTER_COUNT

    def read(self, idx: int) -> int:
        return self.values[idx]

    def write(self, idx: int, value: int):
        self.values[idx] = value & WORD_MASK

    @property
    def pc(self) -> int:
        return self.values[R_PC]

    @pc.setter
    def pc(self, value: int):
        self.write(R_PC, value)

    @property
    def cond(self) -> int:
        return self.values[R_COND]

    def update_flags(self, value: int):
        value &= WORD_MASK

        if value == 0:
            self.values[R_COND] = FL_ZRO
        elif value & SIGN_BIT:
            self.values[R_COND] = FL_NEG
        else:
            self.values[R_COND] = FL_POS

    def debug_dump(self):
        flags = ''.join([
            'n' if self.cond & FL_NEG else '-',
            'z' if self.cond & FL_ZRO else '-',
            'p' if self.cond & FL_POS else '-'
        ])

        state = [f'R{i}:{self.values[i]:04X}' for i in range(GP_REGS)]
        state.append(f'PC:{self.pc:04X}')
        state.append(f'COND:{flags}')

        lg.debug(' '.join(state))
