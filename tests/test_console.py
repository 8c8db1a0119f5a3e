import io

import pytest

from gama.console import Console
from gama.errors import RuntimeInputError


def test_reads_whitespace_separated_integers():
    console = Console(stdin=io.StringIO('1 2\n\n  -3\n'))
    assert [console.read_int() for _ in range(3)] == [1, 2, -3]


def test_end_of_input():
    console = Console(stdin=io.StringIO(''))
    with pytest.raises(RuntimeInputError):
        console.read_int(line=2)


def test_not_a_number():
    console = Console(stdin=io.StringIO('abc'))
    with pytest.raises(RuntimeInputError) as excinfo:
        console.read_int(line=7)
    assert excinfo.value.line == 7


def test_write_line_captures_output():
    out = io.StringIO()
    console = Console(stdout=out)
    console.write_line('hola')
    console.write_line('3')
    assert out.getvalue() == 'hola\n3\n'
    assert console.output == 'hola\n3\n'


def test_defaults_to_sys_streams(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('42'))
    console = Console()
    assert console.read_int() == 42
    console.write_line('x')
    assert capsys.readouterr().out == 'x\n'
