import pytest
from click.testing import CliRunner

from bfvm.compile.compiler import compile
import bfvm.runtime.emulator as emulator
from bfvm.runtime.emulator import run, EXIT_HALT, EXIT_ERROR
from bfvm.runtime.streams import ByteSink

from unit_utils import find_file, expected_output


def invoke(command, args, input_bytes=b''):
    return CliRunner().invoke(command, args, input=input_bytes)


@pytest.mark.filterwarnings('error::DeprecationWarning')
def test_run_hello():
    result = invoke(run, [str(find_file('testdata/hello.bf'))])
    assert result.exit_code == EXIT_HALT
    assert result.stdout_bytes == expected_output('hello')


def test_run_with_input():
    result = invoke(run, [str(find_file('testdata/reverse.bf'))], b'xyz')
    assert result.exit_code == EXIT_HALT
    assert result.stdout_bytes == b'zyx'


def test_run_missing_argument():
    result = invoke(run, [])
    assert result.exit_code != 0
    assert result.stdout_bytes == b''


def test_run_missing_file(caplog):
    result = invoke(run, [str(find_file('testdata/missing.bf'))])
    assert result.exit_code == EXIT_ERROR
    assert result.stdout_bytes == b''
    assert 'Unable to read' in caplog.text


def test_run_syntax_error(caplog):
    result = invoke(run, [str(find_file('testdata/unclosed.bf'))])
    assert result.exit_code == EXIT_ERROR
    assert result.stdout_bytes == b''
    assert "Unmatched '[' at line 2, column 2" in caplog.text


def test_run_bounds_error_keeps_output(caplog):
    result = invoke(run, [str(find_file('testdata/underflow.bf'))])
    assert result.exit_code == EXIT_ERROR
    assert result.stdout_bytes == b'\x01'
    assert 'out of tape range' in caplog.text


def test_run_step_limit(caplog):
    result = invoke(run, ['--max-steps', '1000', str(find_file('testdata/forever.bf'))])
    assert result.exit_code == EXIT_ERROR
    assert 'Step limit 1000 exceeded' in caplog.text


def test_compile_listing():
    result = invoke(compile, [str(find_file('testdata/letter.bf'))])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == ' 0: ADD 8'
    assert lines[-1] == '10: HLT'


def test_compile_no_listing():
    result = invoke(compile, ['--no-listing', str(find_file('testdata/letter.bf'))])
    assert result.exit_code == 0
    assert result.stdout == ''


def test_compile_syntax_error():
    result = invoke(compile, [str(find_file('testdata/unclosed.bf'))])
    assert result.exit_code == EXIT_ERROR


def test_compile_missing_file(caplog):
    result = invoke(compile, [str(find_file('testdata/missing.bf'))])
    assert result.exit_code == EXIT_ERROR
    assert 'Unable to read' in caplog.text


class ClosedSink(ByteSink):
    def __init__(self, stream):
        pass

    def write(self, value: int):
        raise BrokenPipeError()


def test_run_output_closed(monkeypatch, caplog):
    monkeypatch.setattr(emulator, 'StreamSink', ClosedSink)
    result = invoke(run, [str(find_file('testdata/hello.bf'))])

    assert result.exit_code == EXIT_ERROR
    assert 'output closed' in caplog.text
    assert 'Traceback' not in result.output
