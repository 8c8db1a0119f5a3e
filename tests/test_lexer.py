import pytest

from gama.errors import LexicalError
from gama.lexer import Token, TokenKind, tokenize, detokenize


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_declaration_tokens():
    tokens = tokenize('Entero a = 1;')
    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.TYPE, 'Entero'),
        (TokenKind.IDENT, 'a'),
        (TokenKind.ASSIGN, '='),
        (TokenKind.NUMBER, '1'),
        (TokenKind.SEMI, ';'),
        (TokenKind.EOF, 'EOF'),
    ]


def test_empty_source_is_just_eof():
    tokens = tokenize('')
    assert tokens == [Token(TokenKind.EOF, 'EOF', 1, 1)]


def test_keywords_are_case_insensitive_and_keep_spelling():
    tokens = tokenize('IMPRIMIR imprimir ImPrImIr')
    assert [t.kind for t in tokens[:3]] == [TokenKind.PRINT] * 3
    assert [t.text for t in tokens[:3]] == ['IMPRIMIR', 'imprimir', 'ImPrImIr']


def test_type_keyword_aliases():
    assert kinds('Entero Caracter Flotante var const items item') == [TokenKind.TYPE] * 7 + [TokenKind.EOF]


def test_english_and_spanish_keyword_aliases():
    assert kinds('Si If Sino Else Mientras While') == [
        TokenKind.IF, TokenKind.IF, TokenKind.ELSE, TokenKind.ELSE,
        TokenKind.WHILE, TokenKind.WHILE, TokenKind.EOF,
    ]
    assert kinds('Caso Case Predeterminado Default Romper Break Suma Leer Read Print') == [
        TokenKind.CASE, TokenKind.CASE, TokenKind.DEFAULT, TokenKind.DEFAULT,
        TokenKind.BREAK, TokenKind.BREAK, TokenKind.SUM, TokenKind.READ,
        TokenKind.READ, TokenKind.PRINT, TokenKind.EOF,
    ]


def test_identifier_with_keyword_prefix():
    tokens = tokenize('Sinonimo x1')
    assert tokens[0].kind is TokenKind.IDENT
    assert tokens[0].text == 'Sinonimo'
    assert tokens[1].kind is TokenKind.IDENT


def test_two_char_operators_win_over_single():
    assert kinds('== != <= >= = < > !') == [
        TokenKind.EQ, TokenKind.NE, TokenKind.LE, TokenKind.GE,
        TokenKind.ASSIGN, TokenKind.LT, TokenKind.GT, TokenKind.UNKNOWN,
        TokenKind.EOF,
    ]


def test_number_then_letters_split():
    tokens = tokenize('12abc')
    assert [(t.kind, t.text) for t in tokens[:2]] == [
        (TokenKind.NUMBER, '12'), (TokenKind.IDENT, 'abc'),
    ]


def test_unknown_characters_become_tokens():
    tokens = tokenize('a @ b')
    assert tokens[1].kind is TokenKind.UNKNOWN
    assert tokens[1].text == '@'


def test_string_literal_excludes_quotes():
    tokens = tokenize('Imprimir("hola mundo");')
    string = tokens[2]
    assert string.kind is TokenKind.STRING
    assert string.text == 'hola mundo'


def test_unterminated_string_is_lexical_error():
    with pytest.raises(LexicalError) as excinfo:
        tokenize('Imprimir("hola);')
    assert excinfo.value.line == 1


def test_string_must_close_on_same_line():
    with pytest.raises(LexicalError) as excinfo:
        tokenize('Entero a;\nImprimir("hola\nmundo");')
    assert excinfo.value.line == 2


def test_line_numbers_and_columns():
    tokens = tokenize('Entero a;\n\n  a = 2;')
    a = tokens[3]
    assert (a.text, a.line, a.column) == ('a', 3, 3)
    assert tokens[-1].line == 3


def test_max_tokens_counts_eof():
    assert len(tokenize('a b', max_tokens=3)) == 3
    with pytest.raises(LexicalError):
        tokenize('a b c', max_tokens=3)


def test_max_lexeme_len():
    tokenize('abcd', max_lexeme_len=4)
    with pytest.raises(LexicalError):
        tokenize('abcde', max_lexeme_len=4)


def test_kind_codes_follow_declaration_order():
    assert TokenKind.TYPE.code == 0
    assert TokenKind.EOF.code == list(TokenKind).index(TokenKind.EOF)


def test_detokenize_round_trip():
    source = 'Entero a = 1 , b ;\nSi (a<2) { Imprimir("x y"); } Sino Suma a^2;'
    tokens = tokenize(source)
    again = tokenize(detokenize(tokens))
    assert [(t.kind, t.text) for t in again] == [(t.kind, t.text) for t in tokens]
