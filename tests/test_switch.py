import io

import pytest

from gama.interpreter import Interpreter, parse_program


def output(source):
    interp = Interpreter(stdout=io.StringIO())
    interp.run(parse_program(source))
    return interp.console.lines


SWITCH = '''
Entero x = {value};
Switch (x) {{
    Case 1: Imprimir(1);
    Case 2: Imprimir(2);
    Break;
    Default: Imprimir(0);
}}
'''


@pytest.mark.parametrize('value, expected', [(1, ['1']), (2, ['2']), (7, ['0'])])
def test_switch_selects_one_branch(value, expected):
    assert output(SWITCH.format(value=value)) == expected


def test_first_matching_case_wins():
    source = 'Switch (3) { Case 3: Imprimir("a"); Case 3: Imprimir("b"); }'
    assert output(source) == ['a']


def test_no_match_without_default():
    assert output('Switch (5) { Case 1: Imprimir(1); } Imprimir("after");') == ['after']


def test_only_default():
    assert output('Switch (5) { Default: Imprimir("d"); }') == ['d']


def test_case_body_can_be_block():
    source = 'Entero y = 0; Switch (1 + 1) { Case 2: { y = 5; Imprimir(y); } Default: y = 9; } Imprimir(y);'
    assert output(source) == ['5', '5']


def test_spanish_case_keywords():
    source = 'Switch (2) { Caso 1: Imprimir(1); Caso 2: Imprimir(2); Romper; Predeterminado: Imprimir(0); }'
    assert output(source) == ['2']


def test_skipped_cases_do_not_touch_symbols():
    interp = Interpreter(stdout=io.StringIO())
    interp.run(parse_program('Switch (2) { Case 1: a = 1; Case 2: b = 2; Case 3: c = 3; Default: d = 4; }'))
    assert interp.symbols.snapshot() == {'b': 2}
    assert 'a' not in interp.symbols
    assert 'c' not in interp.symbols
    assert 'd' not in interp.symbols
