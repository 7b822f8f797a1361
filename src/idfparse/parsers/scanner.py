"""Scanner for IDF 3.0 text.

Turns the input buffer into a lazy stream of classified Lark tokens. The
terminal definitions live in ``idf30.lark``; Lark's basic lexer does the
matching and skips spaces, tabs and ``#`` comments. The stream always ends
with a synthetic ``EOI`` token so the parser can report positions for
end-of-input failures.
"""

import functools
import logging
from collections.abc import Iterator
from pathlib import Path

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters

from ..exceptions import Diagnostic, ErrorKind, IDFSyntaxError, SourcePosition

logger = logging.getLogger(__name__)

# Load grammar from file (relative to this module)
GRAMMAR_PATH = Path(__file__).parent / "idf30.lark"

SECTION_NAME = "SECTION_NAME"
WORD = "WORD"
NUMBER = "NUMBER"
QUOTED_STRING = "QUOTED_STRING"
NEWLINE = "NEWLINE"
EOI = "EOI"

QUOTES = "\"'"


@functools.cache
def _get_lark_lexer() -> Lark:
    """Returns a cached Lark instance configured with the basic lexer."""
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        lexer="basic",
    )


def position_of(token: Token) -> SourcePosition:
    """Returns the source position of a scanner token."""
    return SourcePosition(offset=token.start_pos, line=token.line, column=token.column)


class Scanner:
    """Lazily tokenizes one IDF text buffer.

    Each instance owns its text; the cached Lark lexer holds no per-parse state.
    """

    def __init__(self, text: str):
        self._text = text

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        """Yields tokens, ending with an ``EOI`` token.

        Raises:
            IDFSyntaxError: UnterminatedQuote or UnexpectedCharacter.
        """
        count = 0
        try:
            for token in _get_lark_lexer().lex(self._text):
                count += 1
                yield token
        except UnexpectedCharacters as e:
            raise self._lex_error(e) from None
        logger.debug(f"Scanned {count} tokens")
        yield self._end_token()

    def _lex_error(self, error: UnexpectedCharacters) -> IDFSyntaxError:
        position = SourcePosition(
            offset=error.pos_in_stream, line=error.line, column=error.column
        )
        char = self._text[error.pos_in_stream]
        if char in QUOTES:
            return IDFSyntaxError(
                Diagnostic(
                    kind=ErrorKind.UNTERMINATED_QUOTE,
                    message=f"Quoted string opened with {char} is never closed",
                    position=position,
                )
            )
        return IDFSyntaxError(
            Diagnostic(
                kind=ErrorKind.UNEXPECTED_CHARACTER,
                message=f"Unexpected character {char!r}",
                position=position,
            )
        )

    def _end_token(self) -> Token:
        end = len(self._text)
        line = self._text.count("\n") + 1
        column = end - (self._text.rfind("\n") + 1) + 1
        return Token(EOI, "", start_pos=end, line=line, column=column, end_pos=end)
