import sys
from pathlib import Path
import logging as lg
import traceback

import click

import bfvm.common.ops as ops
from bfvm.common.settings import RunSettings
from bfvm.compile.compiler import compile_source, compile_file
from bfvm.compile.fpp import CompileError
from bfvm.runtime.streams import (
    ByteSource, ByteSink, BufferSource, BufferSink, StreamSource, StreamSink
)
import bfvm.runtime.vm as vm


EXIT_HALT = 0
EXIT_ERROR = 1
EXIT_KEYBOARD = 3


def execute(
    program: ops.Program, source: ByteSource, sink: ByteSink,
    max_steps: int | None = None
) -> vm.VM:
    proc = vm.VM(program, source, sink)
    proc.run(max_steps)
    return proc


def run_source(
    source_text: bytes | str, input_bytes: bytes = b'',
    max_steps: int | None = None
) -> bytes:
    program = compile_source(source_text)
    sink = BufferSink()
    execute(program, BufferSource(input_bytes), sink, max_steps)
    return sink.getvalue()


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--max-steps', type=click.IntRange(min=1), help='Abort after this many instructions')
@click.argument('source', type=Path)
def run(ctx: click.Context, source: Path, **params):
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

    lg.debug(f'Loaded {len(program)} instructions')

    try:
        proc = execute(
            program,
            StreamSource(sys.stdin.buffer),
            StreamSink(sys.stdout.buffer),
            ctx.obj.max_steps
        )

        lg.debug(f'Execution halted gracefully after {proc.steps} steps')
        sys.exit(EXIT_HALT)

    except vm.RuntimeFault as e:
        lg.error(f'Execution halted on error: {e}')
        sys.exit(EXIT_ERROR)

    except BrokenPipeError:
        lg.error('Execution halted: output closed')
        sys.exit(EXIT_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.error(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_ERROR)


if __name__ == '__main__':
    run()
