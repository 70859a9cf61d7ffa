''' First pass processor '''

import logging as lg
from dataclasses import replace
from typing import List

import pyparsing as pp

import bfvm.common.ops as ops


class CompileError(Exception):
    offset: int
    line: int
    column: int

    def __init__(self, message: str, offset: int, line: int, column: int):
        super().__init__(f'{message} at line {line}, column {column}')
        self.offset = offset
        self.line = line
        self.column = column


class UnmatchedOpenBracket(CompileError):
    def __init__(self, offset: int, line: int, column: int):
        super().__init__("Unmatched '['", offset, line, column)


class UnmatchedCloseBracket(CompileError):
    def __init__(self, offset: int, line: int, column: int):
        super().__init__("Unmatched ']'", offset, line, column)


def locate(source: str, offset: int):
    return (pp.lineno(offset, source), pp.col(offset, source))


class FPP:
    source: str
    program: ops.Program
    loop_stack: List[int]       # Indices of pending JZ instructions
    loop_offsets: List[int]     # Source offsets of pending '['

    def __init__(self, source: str):
        self.source = source
        self.program = list()
        self.loop_stack = list()
        self.loop_offsets = list()

    def here(self) -> int:
        return len(self.program)

    def emit(self, op: int, arg: int = 0):
        instruction = ops.Instruction(op, arg)
        lg.debug('Issuing %d: %s', self.here(), instruction)
        self.program.append(instruction)

    # Handlers
    def issue_run(self, run: str):
        op = ops.RUN_LENGTH_OPS[run[0]]
        self.emit(op, len(run))

    def issue_op(self, char: str):
        self.emit(ops.SINGLE_OPS[char])

    def open_loop(self, offset: int):
        self.loop_stack.append(self.here())
        self.loop_offsets.append(offset)
        self.emit(ops.JZ)  # Target is patched by the matching ']'

    def close_loop(self, offset: int):
        if not self.loop_stack:
            raise UnmatchedCloseBracket(offset, *locate(self.source, offset))

        open_idx = self.loop_stack.pop()
        self.loop_offsets.pop()
        here = self.here()

        self.program[open_idx] = replace(self.program[open_idx], arg=here + 1)
        lg.debug('Patched %d: %s', open_idx, self.program[open_idx])

        self.emit(ops.JNZ, open_idx + 1)

    def finish(self) -> ops.Program:
        self.emit(ops.HLT)

        if self.loop_stack:
            # Report the innermost pending '['
            offset = self.loop_offsets[-1]
            raise UnmatchedOpenBracket(offset, *locate(self.source, offset))

        return self.program
