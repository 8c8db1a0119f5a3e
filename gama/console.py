import re
import sys
from typing import List, Optional, TextIO

from gama.errors import RuntimeInputError

# Optional sign followed by ASCII digits, as scanf("%d") accepts.
INTEGER_WORD = re.compile(r"[+-]?[0-9]+")


class Console:
    """Program-facing standard streams.

    Reads integers for `Leer` and writes the lines produced by print
    statements. Every written line is also kept in `lines`, so callers can
    inspect the captured output after a run.
    """
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        # None means "whatever sys.stdin/sys.stdout is at call time".
        self.stdin = stdin
        self.stdout = stdout
        self.lines: List[str] = []
        self.pending: List[str] = []

    @property
    def output(self) -> str:
        return ''.join(line + '\n' for line in self.lines)

    def write_line(self, text: str) -> None:
        self.lines.append(text)
        stream = self.stdout if self.stdout is not None else sys.stdout
        stream.write(text + '\n')
        stream.flush()

    def next_word(self) -> Optional[str]:
        stream = self.stdin if self.stdin is not None else sys.stdin
        while not self.pending:
            line = stream.readline()
            if line == '':
                return None
            self.pending = line.split()
        return self.pending.pop(0)

    def read_int(self, line: Optional[int] = None) -> int:
        word = self.next_word()
        if word is None:
            raise RuntimeInputError("could not read an integer: end of input", line)
        if not INTEGER_WORD.fullmatch(word):
            raise RuntimeInputError(f"could not read an integer from {word!r}", line)
        return int(word)
