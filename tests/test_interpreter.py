import io

import pytest

from gama.ast import Program, Block, PrintStmt, Literal
from gama.errors import (
    DivisionByZero, ModuloByZero, UndeclaredVariable, UninitializedVariable,
    RuntimeInputError, SymbolTableFull, NestingTooDeep,
)
from gama.interpreter import Interpreter, parse_program, run_program


def run(source, stdin=''):
    interp = Interpreter(stdin=io.StringIO(stdin), stdout=io.StringIO())
    interp.run(parse_program(source))
    return interp


def output(source, stdin=''):
    return run(source, stdin).console.lines


@pytest.mark.parametrize('expr, expected', [
    ('2 + 3 * 4', 14),
    ('(2 + 3) * 4', 20),
    ('2 ^ 3 ^ 2', 64),
    ('10 % 3', 1),
    ('-7 / 2', -3),
    ('-7 % 2', -1),
    ('7 % -2', 1),
    ('1 < 2 < 1', 0),
    ('3 == 3', 1),
    ('3 != 3', 0),
    ('2 >= 3', 0),
    ('2 <= 3', 1),
    ('-2 ^ 2', 4),
    ('2 ^ -1', 0),
    ('1 ^ -5', 1),
    ('10 - 4 - 3', 3),
    ('100 / 10 / 5', 2),
])
def test_expression_values(expr, expected):
    assert output(f'Imprimir({expr});') == [str(expected)]


def test_no_32_bit_wraparound():
    assert output('Imprimir(2 ^ 40);') == [str(2 ** 40)]


def test_division_by_zero_aborts_run():
    interp = Interpreter(stdout=io.StringIO())
    with pytest.raises(DivisionByZero) as excinfo:
        interp.run(parse_program('Imprimir(1);\nImprimir(5 / 0);\nImprimir(2);'))
    assert excinfo.value.line == 2
    assert interp.console.lines == ['1']


def test_modulo_by_zero():
    with pytest.raises(ModuloByZero):
        run('Entero a = 5 % 0;')


def test_zero_to_negative_power():
    with pytest.raises(DivisionByZero):
        run('Imprimir(0 ^ -1);')


def test_declaration_list_values():
    interp = run('Entero a = 1, b, c = 3;')
    assert interp.symbols.snapshot() == {'a': 1, 'c': 3}
    assert 'b' in interp.symbols
    with pytest.raises(UninitializedVariable):
        interp.symbols.get('b')


def test_redeclaration_makes_variable_uninitialized():
    with pytest.raises(UninitializedVariable):
        run('Entero a = 1; Entero a; Imprimir(a);')


def test_declaration_initializer_cannot_use_itself():
    with pytest.raises(UninitializedVariable):
        run('Entero a = 1; Entero a = a + 1;')


def test_assignment_declares_implicitly():
    assert output('x = 4; Imprimir(x * x);') == ['16']


def test_undeclared_variable():
    with pytest.raises(UndeclaredVariable) as excinfo:
        run('Imprimir(y);')
    assert excinfo.value.name == 'y'


def test_both_operands_evaluated_before_error():
    with pytest.raises(UndeclaredVariable):
        run('Imprimir(0 * y);')


def test_if_else_exclusive():
    assert output('Si (1) Imprimir("then"); Sino Imprimir("else");') == ['then']
    assert output('Si (0) Imprimir("then"); Sino Imprimir("else");') == ['else']
    assert output('Si (0) Imprimir("then");') == []


def test_nonzero_is_true():
    assert output('Si (-5) Imprimir("yes");') == ['yes']


def test_while_loop():
    assert output('Entero i = 0; Mientras (i < 3) { Imprimir(i); i = i + 1; }') == ['0', '1', '2']


def test_while_false_never_runs():
    assert output('Mientras (0) Imprimir(1); Imprimir(2);') == ['2']


def test_blocks_do_not_scope():
    assert output('{ Entero a = 9; } Imprimir(a);') == ['9']


def test_sum_statement_prints():
    assert output('Suma 2 + 2;') == ['4']


def test_read_statement():
    assert output('Entero a, b; Leer(a); Leer(b); Imprimir(a - b);', stdin='10\n4') == ['6']


def test_read_failure():
    with pytest.raises(RuntimeInputError):
        run('Entero a; Leer(a);', stdin='nope')


def test_symbol_limit():
    interp = Interpreter(stdout=io.StringIO(), max_symbols=2)
    with pytest.raises(SymbolTableFull):
        interp.run(parse_program('Entero a, b, c;'))


def test_run_program_writes_stdout(capsys):
    out = run_program('Imprimir("Hola");')
    assert out == 'Hola\n'
    assert capsys.readouterr().out == 'Hola\n'


def test_run_program_with_lark_parser(capsys):
    run_program('Entero i = 0; Mientras (i < 2) { Imprimir(i); i = i + 1; }', parser='lark')
    assert capsys.readouterr().out.split() == ['0', '1']


def test_unknown_parser_name():
    with pytest.raises(ValueError):
        parse_program('x = 1;', parser='yacc')


def test_negative_power_of_huge_base():
    assert output('Entero a = 10 ^ 400; Imprimir(a ^ -1); Imprimir(-1 ^ -3); Imprimir(-1 ^ -4);') == ['0', '-1', '1']


def test_long_left_chain_evaluates():
    source = 'Imprimir(' + '+'.join(['1'] * 1020) + ');'
    assert output(source) == ['1020']


def test_skipped_else_branch_leaves_table_untouched():
    interp = run('Si (1) Imprimir(1); Sino y = 5;')
    assert interp.console.lines == ['1']
    assert 'y' not in interp.symbols


def test_skipped_then_branch_leaves_value():
    interp = run('Entero x = 0; Si (0) x = 1;')
    assert interp.symbols.get('x') == 0
    assert interp.console.lines == []


def test_read_rejects_non_scanf_integers():
    for word in ('1_000', '١٢', '1.5', '--3'):
        with pytest.raises(RuntimeInputError):
            run('Entero a; Leer(a);', stdin=word)
    assert output('Entero a; Leer(a); Imprimir(a);', stdin='+17') == ['17']


def test_too_deeply_nested_blocks_raise_gama_error():
    body = PrintStmt(Literal(1))
    for _ in range(5000):
        body = Block([body])
    interp = Interpreter(stdout=io.StringIO())
    with pytest.raises(NestingTooDeep):
        interp.run(Program([body]))
    assert interp.console.lines == []
