"""CLI entry point for the Gama interpreter.

Usage:
    python -m gama [-v|-vv|-vvv|-vvvv] [options] <program_file>
    python -m gama [-v...] --emit-ast <program_file>
    python -m gama [-v...] --ast <ast_json_file>

Options:
  -v               Increase debug verbosity (can be repeated)
  --parser NAME    Front end used to parse the program: descent (default) or lark
  --tokens FILE    Write the token dump of the program to FILE
  --report FILE    Write the lexer/parser/execution report to FILE
  --max-tokens N   Token limit (0 disables it)
  --max-lexeme N   Lexeme length limit (0 disables it)
  --max-vars N     Variable limit (0 disables it)
  --emit-ast       Parse the given .gama file and emit an AST JSON file
  --ast            Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. On success the program output is followed by
a final `OK` line; on failure the diagnostic goes to stderr and the exit
status is 1.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .environment import DEFAULT_MAX_SYMBOLS
from .errors import GamaError, LexicalError, ParseError
from .interpreter import PARSERS, Interpreter, parse_program, run_source
from .lexer import DEFAULT_MAX_TOKENS, DEFAULT_MAX_LEXEME_LEN
from .report import write_report, write_token_dump


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Gama language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--parser', choices=PARSERS, default='descent', help='parser front end (default: descent)')
    parser.add_argument('--tokens', metavar='FILE', help='write the token dump to FILE')
    parser.add_argument('--report', metavar='FILE', help='write the lexer/parser/execution report to FILE')
    parser.add_argument('--max-tokens', type=int, default=DEFAULT_MAX_TOKENS, metavar='N',
                        help=f'maximum number of tokens (default: {DEFAULT_MAX_TOKENS}, 0 = unlimited)')
    parser.add_argument('--max-lexeme', type=int, default=DEFAULT_MAX_LEXEME_LEN, metavar='N',
                        help=f'maximum lexeme length (default: {DEFAULT_MAX_LEXEME_LEN}, 0 = unlimited)')
    parser.add_argument('--max-vars', type=int, default=DEFAULT_MAX_SYMBOLS, metavar='N',
                        help=f'maximum number of variables (default: {DEFAULT_MAX_SYMBOLS}, 0 = unlimited)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='GAMA_FILE', help='emit AST JSON for the given .gama file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Gama program file (.gama) to execute')
    args = parser.parse_args(argv)

    max_tokens = args.max_tokens or None
    max_lexeme_len = args.max_lexeme or None
    max_symbols = args.max_vars or None

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source, parser=args.parser,
                                        max_tokens=max_tokens, max_lexeme_len=max_lexeme_len)
        except GamaError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
        try:
            text = json.dumps(ast_to_obj(ast_program), ensure_ascii=False, indent=2)
        except RecursionError:
            print(f"Error: {program_file} is nested too deeply to serialize", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        source = read_source(ast_path)
        try:
            ast_program = ast_from_obj(json.loads(source))
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(ast_program, Program):
            print(f"Error: invalid AST file {ast_path}: top-level node is not a Program", file=sys.stderr)
            sys.exit(1)
        interpreter = Interpreter(debug_level=args.v, max_symbols=max_symbols)
        try:
            interpreter.run(ast_program)
        except GamaError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
        print("OK")
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    source = read_source(Path(args.program))
    result = run_source(source, parser=args.parser, debug_level=args.v,
                        max_tokens=max_tokens, max_lexeme_len=max_lexeme_len,
                        max_symbols=max_symbols)

    if args.tokens:
        write_token_dump(result.tokens, args.tokens)
    if args.report:
        front_end_failed = isinstance(result.error, (LexicalError, ParseError))
        parse_result = str(result.error) if front_end_failed else "OK"
        runtime_error = str(result.error) if result.error and not front_end_failed else None
        write_report(args.report, source, result.tokens, parse_result, result.output, runtime_error)

    if not result.ok:
        print(str(result.error), file=sys.stderr)
        sys.exit(1)
    print("OK")


if __name__ == '__main__':
    main()
