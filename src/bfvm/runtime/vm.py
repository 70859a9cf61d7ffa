import logging as lg

import bfvm.common.ops as ops
from bfvm.common.vmconf import TAPE_SIZE, CELL_MODULO
from bfvm.runtime.streams import ByteSource, ByteSink


class RuntimeFault(Exception):
    pass


class TapeBoundsError(RuntimeFault):
    def __init__(self, dp: int, ip: int, tape_size: int):
        super().__init__(
            f'Data pointer {dp} out of tape range [0, {tape_size}) at instruction {ip}'
        )
        self.dp = dp
        self.ip = ip


class StepLimitExceeded(RuntimeFault):
    def __init__(self, max_steps: int, ip: int):
        super().__init__(f'Step limit {max_steps} exceeded at instruction {ip}')
        self.max_steps = max_steps
        self.ip = ip


class VM():
    ip: int         # Instruction pointer
    dp: int         # Data pointer
    tape: bytearray
    halted: bool
    steps: int      # Executed instructions, HLT included

    def __init__(
        self, program: ops.Program,
        source: ByteSource, sink: ByteSink,
        tape_size: int = TAPE_SIZE
    ):
        self.program = program  # Ref. to compiled program
        self.source = source
        self.sink = sink

        self.tape = bytearray(tape_size)
        self.ip = 0
        self.dp = 0
        self.halted = False
        self.steps = 0

    # - Helpers - #

    def debug_dump(self):
        lg.debug(
            f'IP:{self.ip} DP:{self.dp} M:{self.tape[self.dp]:02X} '
            f'STEP:{self.steps} {self.program[self.ip]}'
        )

    def move_to(self, dp: int):
        if dp < 0 or dp >= len(self.tape):
            raise TapeBoundsError(dp, self.ip, len(self.tape))

        self.dp = dp

    # - Operations - #

    def hlt(self, _: int):
        self.halted = True

    def add(self, n: int):
        self.tape[self.dp] = (self.tape[self.dp] + n) % CELL_MODULO
        self.ip += 1

    def sub(self, n: int):
        self.tape[self.dp] = (self.tape[self.dp] - n) % CELL_MODULO
        self.ip += 1

    def mvr(self, n: int):
        self.move_to(self.dp + n)
        self.ip += 1

    def mvl(self, n: int):
        self.move_to(self.dp - n)
        self.ip += 1

    def out(self, _: int):
        self.sink.write(self.tape[self.dp])
        self.ip += 1

    def inp(self, _: int):
        value = self.source.read()
        self.tape[self.dp] = 0 if value is None else value
        self.ip += 1

    def jz(self, target: int):
        if self.tape[self.dp] == 0:
            self.ip = target
        else:
            self.ip += 1

    def jnz(self, target: int):
        if self.tape[self.dp] != 0:
            self.ip = target
        else:
            self.ip += 1

    HANDLERS = {
        ops.HLT: hlt,
        ops.ADD: add,
        ops.SUB: sub,
        ops.MVR: mvr,
        ops.MVL: mvl,
        ops.OUT: out,
        ops.INP: inp,
        ops.JZ: jz,
        ops.JNZ: jnz
    }

    # -- Implementation -- #

    def exec_next(self):
        instruction = self.program[self.ip]
        handler = self.HANDLERS[instruction.op]
        self.steps += 1
        handler(self, instruction.arg)

    def run(self, max_steps: int | None = None):
        tracing = lg.root.isEnabledFor(lg.DEBUG)

        while not self.halted:
            if max_steps is not None and self.steps >= max_steps:
                raise StepLimitExceeded(max_steps, self.ip)

            if tracing:
                self.debug_dump()

            self.exec_next()
