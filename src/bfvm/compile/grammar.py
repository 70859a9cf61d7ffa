''' Source grammar '''

import re

import pyparsing as pp

from bfvm.compile.fpp import FPP


def g_run(char: str):
    return pp.Regex(f'{re.escape(char)}+').set_parse_action(
        lambda r: (FPP.issue_run, r[0])
    )


def g_single(char: str):
    return pp.Literal(char).set_parse_action(lambda r: (FPP.issue_op, r[0]))


def g_bracket(char: str, func):
    # Offset goes along for diagnostics
    return pp.Literal(char).set_parse_action(lambda s, loc, r: (func, loc))


add_run = g_run('+')
sub_run = g_run('-')
right_run = g_run('>')
left_run = g_run('<')

out_cmd = g_single('.')
inp_cmd = g_single(',')

open_cmd = g_bracket('[', FPP.open_loop)
close_cmd = g_bracket(']', FPP.close_loop)

# Anything else is a comment
comment = pp.Suppress(pp.Regex(r'[^+\-<>.,\[\]]+'))

command = (
    add_run | sub_run | right_run | left_run |
    out_cmd | inp_cmd |
    open_cmd | close_cmd |
    comment
)

program = (pp.ZeroOrMore(command) + pp.StringEnd()).parse_with_tabs()
