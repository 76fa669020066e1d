import sys
import struct
from pathlib import Path
import logging as lg
import traceback

import click

import lc3vm.common.ops as ops
import lc3vm.runtime.cpu as cpu
import lc3vm.runtime.decoder as dec


EXIT_HALT = 0
EXIT_ILLEGAL_OPCODE = 2
EXIT_KEYBOARD = 3
EXIT_BUDGET = 4
EXIT_EXEC_ERROR = 100


class ImageError(Exception):
    pass


class BudgetExhausted(Exception):
    def __init__(self, steps: int):
        super().__init__(f'Step budget of {steps} exhausted')
        self.steps = steps


def parse_image(data: bytes) -> tuple[int, list[int]]:
    # Big-endian words, the first one is the load origin
    if len(data) < 2:
        raise ImageError('Image has no origin word')

    if len(data) % 2 != 0:
        raise ImageError(f'Image length {len(data)} is not a whole number of words')

    words = list(struct.unpack(f'>{len(data) // 2}H', data))
    return words[0], words[1:]


def init_machine(image: bytes) -> cpu.Machine:
    origin, block = parse_image(image)

    proc = cpu.Machine()
    proc.load(block, origin)
    proc.registers.pc = origin

    lg.info(f'Image of {len(block)} words loaded at {origin:04X}')
    return proc


def execute(image: bytes, max_steps: int | None = None):
    proc = init_machine(image)
    steps = 0

    while max_steps is None or steps < max_steps:
        instr = proc.step()
        steps += 1

        if isinstance(instr, dec.Trap) and instr.vector == ops.TRAP_HALT:
            proc.registers.debug_dump()
            raise cpu.Halt(proc)

    proc.registers.debug_dump()
    raise BudgetExhausted(steps)


@click.command()
@click.argument('image_filename', type=Path)
@click.option('--max-steps', type=int, default=None, help='Stop after this many instructions')
@click.option('--verbose', is_flag=True, help='Log every executed instruction')
def run(image_filename: Path, max_steps: int | None, verbose: bool):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("LC3VM")

    try:
        image = image_filename.read_bytes()
        execute(image, max_steps)

    except cpu.Halt:
        lg.info('Execution halted gracefully')
        sys.exit(EXIT_HALT)

    except cpu.IllegalOpcode as e:
        lg.info(f'Execution halted on {e}')
        sys.exit(EXIT_ILLEGAL_OPCODE)

    except BudgetExhausted as e:
        lg.info(f'Execution stopped: {e}')
        sys.exit(EXIT_BUDGET)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
