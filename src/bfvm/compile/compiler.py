import sys
from pathlib import Path
import logging as lg

import click

import bfvm.common.ops as ops
from bfvm.common.vmconf import SOURCE_ENCODING
from bfvm.common.settings import RunSettings
from bfvm.compile.fpp import FPP, CompileError
import bfvm.compile.grammar as grammar


EXIT_OK = 0
EXIT_ERROR = 1


def compile_source(source: bytes | str) -> ops.Program:
    if isinstance(source, bytes):
        source = source.decode(SOURCE_ENCODING)

    first_pass = FPP(source)
    actions = grammar.program.parse_string(source, parse_all=True)

    for (func, arg) in actions:  # type: ignore
        func(first_pass, arg)

    program = first_pass.finish()
    lg.debug(f'Compiled {len(source)} chars into {len(program)} instructions')
    return program


def compile_file(filepath: str | Path) -> ops.Program:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Compiling file {filepath}')
    return compile_source(filepath.read_bytes())


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--listing/--no-listing', default=True, help='Print instruction listing')
@click.argument('source', type=Path)
def compile(ctx: click.Context, source: Path, **params):
    ctx.ensure_object(RunSettings)
    ctx.obj.update(**params)

    lg.basicConfig(level=lg.DEBUG if ctx.obj.verbose else lg.INFO)

    try:
        program = compile_file(source)

    except OSError as e:
        lg.error(f'Unable to read {source}: {e}')
        sys.exit(EXIT_ERROR)

    except CompileError as e:
        lg.error(f'{source}: {e}')
        sys.exit(EXIT_ERROR)

    if ctx.obj.listing:
        click.echo('\n'.join(ops.listing(program)))

    lg.info(f'{source.name}: {len(program)} instructions')
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    compile()
