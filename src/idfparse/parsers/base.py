"""Base parser module with shared token-stream infrastructure.

Provides the abstract base class for idfparse parsers, including file reading
and the buffered lookahead used by recursive descent parsers.
"""

import gzip
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Generic, Optional, TypeVar

from lark import Token

T = TypeVar("T")


class BaseParser(ABC, Generic[T]):
    """Abstract base class for idfparse parsers.

    Tokens are pulled lazily from the scanner: only the lookahead window is
    ever materialised, so a failure late in a large file never pays for
    tokenizing content the parser will not reach.

    Attributes:
        Generic[T]: The type of the model returned by the parser (e.g., Document).
    """

    def __init__(self):
        """Initializes the parser with an empty token stream."""
        self._stream: Iterator[Token] = iter(())
        self._buffer: list[Token] = []

    def _read_file(self, path: Path, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Reads file content, automatically handling .gz compression.

        Both branches open the file in text mode, so ``\\r\\n`` line endings
        are normalised to ``\\n``.

        Args:
            path: Path to the file.
            encoding: Text encoding (default: utf-8).
            errors: Error handling scheme for encoding errors (default: strict).

        Returns:
            The content of the file as a string.
        """
        if path.suffix == ".gz":
            with gzip.open(path, mode="rt", encoding=encoding, errors=errors) as f:
                return f.read()
        with open(path, encoding=encoding, errors=errors) as f:
            return f.read()

    def _init_tokens(self, tokens: Iterable[Token]) -> None:
        """Initializes the token stream for parsing.

        Args:
            tokens: Tokens from the scanner (any iterable, consumed lazily).
        """
        self._stream = iter(tokens)
        self._buffer = []

    def _fill(self, count: int) -> None:
        while len(self._buffer) < count:
            token = next(self._stream, None)
            if token is None:
                return
            self._buffer.append(token)

    def _peek(self, offset: int = 0) -> Optional[Token]:
        """Looks ahead at the token at the given offset without consuming it.

        Args:
            offset: Number of tokens to look ahead (default: 0 = current token).

        Returns:
            The token at the offset position, or None if past end.
        """
        self._fill(offset + 1)
        return self._buffer[offset] if offset < len(self._buffer) else None

    def _consume(self) -> Optional[Token]:
        """Consumes and returns the current token.

        Returns:
            The current token, or None if at end of stream.
        """
        self._fill(1)
        if not self._buffer:
            return None
        return self._buffer.pop(0)

    @abstractmethod
    def parse(self, path: Path) -> T:
        """Parses a file from a given path.

        Args:
            path: Path to the file.

        Returns:
            The parsed data model.
        """
        ...

    @abstractmethod
    def parse_string(self, content: str, name: str = "unknown") -> T:
        """Parses from string content.

        Args:
            content: The raw content string.
            name: Optional name for the parsed object.

        Returns:
            The parsed data model.
        """
        ...
