import logging as lg
from typing import Callable, Sequence

import lc3vm.runtime.decoder as dec
from lc3vm.runtime.memory import Memory, MachineError
from lc3vm.runtime.registers import Registers
from lc3vm.common.hwconf import R_LINK, TRAP_TABLE_BASE


class Halt(Exception):
    def __init__(self, machine: 'Machine'):
        super().__init__('Halted')
        self.machine = machine


class IllegalOpcode(MachineError):
    def __init__(self, addr: int, instr: dec.Unused):
        super().__init__(f'Illegal opcode {instr.word:04X} at {addr:04X}')
        self.addr = addr
        self.instr = instr


class Machine():
    memory: Memory
    registers: Registers

    def __init__(self):
        self.memory = Memory()
        self.registers = Registers()

    # - Helpers - #

    def load(self, block: Sequence[int], offset: int):
        self.memory.load(block, offset)

    def get_gp(self, idx: int) -> int:
        return self.registers.read(idx)

    def set_gp(self, idx: int, val: int):
        self.registers.write(idx, val)

    def pc_relative(self, offset: int) -> int:
        # PC already points past the current instruction
        return self.registers.pc + offset

    def arithm_pair(self, instr: dec.Add, op: Callable[[int, int], int]):
        a = self.get_gp(instr.sr1)
        b = self.get_gp(instr.sr2)
        self.set_gp(instr.dr, op(a, b))

    def arithm_imm(self, instr: dec.AddImmediate, op: Callable[[int, int], int]):
        a = self.get_gp(instr.sr1)
        self.set_gp(instr.dr, op(a, instr.imm5))

    # - Operations - #

    def br(self, instr: dec.Branch):
        if instr.mask & self.registers.cond:
            self.registers.pc = self.pc_relative(instr.offset)

    def add(self, instr: dec.Add):
        self.arithm_pair(instr, lambda a, b: a + b)

    def addi(self, instr: dec.AddImmediate):
        self.arithm_imm(instr, lambda a, b: a + b)

    def band(self, instr: dec.And):
        self.arithm_pair(instr, lambda a, b: a & b)

    def bandi(self, instr: dec.AndImmediate):
        self.arithm_imm(instr, lambda a, b: a & b)

    def inv(self, instr: dec.Not):
        self.set_gp(instr.dr, ~self.get_gp(instr.sr))

    def ld(self, instr: dec.Load):
        v = self.memory.read(self.pc_relative(instr.offset))
        self.set_gp(instr.dr, v)

    def st(self, instr: dec.Store):
        self.memory.write(self.pc_relative(instr.offset), self.get_gp(instr.sr))

    def ldi(self, instr: dec.LoadIndirect):
        addr = self.memory.read(self.pc_relative(instr.offset))
        self.set_gp(instr.dr, self.memory.read(addr))

    def sti(self, instr: dec.StoreIndirect):
        addr = self.memory.read(self.pc_relative(instr.offset))
        self.memory.write(addr, self.get_gp(instr.sr))

    def ldr(self, instr: dec.LoadRegister):
        addr = self.get_gp(instr.base) + instr.offset
        self.set_gp(instr.dr, self.memory.read(addr))

    def streg(self, instr: dec.StoreRegister):
        addr = self.get_gp(instr.base) + instr.offset
        self.memory.write(addr, self.get_gp(instr.sr))

    def lea(self, instr: dec.LoadEffectiveAddress):
        self.set_gp(instr.dr, self.pc_relative(instr.offset))

    def jmp(self, instr: dec.Jump):
        self.registers.pc = self.get_gp(instr.base)

    def jsr(self, instr: dec.JumpRegister):
        ret_addr = self.registers.pc

        if instr.relative:
            target = self.pc_relative(instr.offset)
        else:
            # Read before linking so JSRR R7 uses the old R7
            target = self.get_gp(instr.base)

        self.set_gp(R_LINK, ret_addr)
        self.registers.pc = target

    def trap(self, instr: dec.Trap):
        self.set_gp(R_LINK, self.registers.pc)
        self.registers.pc = self.memory.read(TRAP_TABLE_BASE + instr.vector)

    HANDLERS = {
        dec.Branch: br,
        dec.Add: add,
        dec.AddImmediate: addi,
        dec.And: band,
        dec.AndImmediate: bandi,
        dec.Not: inv,
        dec.Load: ld,
        dec.Store: st,
        dec.LoadIndirect: ldi,
        dec.StoreIndirect: sti,
        dec.LoadRegister: ldr,
        dec.StoreRegister: streg,
        dec.LoadEffectiveAddress: lea,
        dec.Jump: jmp,
        dec.JumpRegister: jsr,
        dec.Trap: trap
    }

    # -- Implementation -- #

    def step(self) -> dec.Instruction:
        addr = self.registers.pc
        word = self.memory.read(addr)
        self.registers.pc = addr + 1

        instr = dec.decode(word)
        lg.debug(f'{addr:04X}: {word:04X} {instr}')

        handler = self.HANDLERS.get(type(instr))

        if handler is None:
            # Unused and reserved opcodes: undo the fetch and report
            self.registers.pc = addr
            lg.warning(f'Illegal opcode {word:04X} at {addr:04X}')
            raise IllegalOpcode(addr, instr)

        handler(self, instr)

        if instr.SETS_FLAGS:
            self.registers.update_flags(self.get_gp(getattr(instr, 'dr')))

        return instr
