from dataclasses import dataclass
from typing import Dict, List, Sequence, TypeAlias


# Terminal
HLT = 0x00

# Run-length coded, arg is the count
ADD = 0x01  # M[DP] + N -> M[DP]
SUB = 0x02  # M[DP] - N -> M[DP]
MVR = 0x03  # DP + N -> DP
MVL = 0x04  # DP - N -> DP

# I/O
OUT = 0x05  # M[DP] -> sink
INP = 0x06  # source -> M[DP], 0 on end of stream

# Branches, arg is the absolute target
JZ = 0x07   # if M[DP] .eq 0 jmp T
JNZ = 0x08  # if M[DP] .ne 0 jmp T

MNEMONICS: Dict[int, str] = {
    HLT: 'HLT',
    ADD: 'ADD',
    SUB: 'SUB',
    MVR: 'MVR',
    MVL: 'MVL',
    OUT: 'OUT',
    INP: 'INP',
    JZ: 'JZ',
    JNZ: 'JNZ'
}

RUN_LENGTH_OPS: Dict[str, int] = {
    '+': ADD,
    '-': SUB,
    '>': MVR,
    '<': MVL
}

SINGLE_OPS: Dict[str, int] = {
    '.': OUT,
    ',': INP
}

WITH_ARG = (ADD, SUB, MVR, MVL, JZ, JNZ)


@dataclass(frozen=True)
class Instruction:
    op: int
    arg: int = 0

    def __str__(self) -> str:
        mnemonic = MNEMONICS[self.op]

        if self.op in WITH_ARG:
            return f'{mnemonic} {self.arg}'

        return mnemonic


Program: TypeAlias = List[Instruction]


def listing(program: Sequence[Instruction]) -> List[str]:
    width = len(str(max(len(program) - 1, 0)))
    return [f'{i:>{width}}: {instr}' for i, instr in enumerate(program)]
