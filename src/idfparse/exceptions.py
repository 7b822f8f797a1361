"""idfparse Exceptions.

This module defines the diagnostics produced when IDF text fails to match
the grammar. Every failure is terminal: the parser raises a single
:class:`IDFSyntaxError` carrying one :class:`Diagnostic` and never returns a
partial document.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Enumeration of grammar failures."""

    UNEXPECTED_CHARACTER = "UnexpectedCharacter"
    UNTERMINATED_QUOTE = "UnterminatedQuote"
    INVALID_NUMERIC_LITERAL = "InvalidNumericLiteral"
    MISSING_HEADER_SECTION = "MissingHeaderSection"
    EMPTY_HEADER_SECTION = "EmptyHeaderSection"
    NO_DATA_SECTIONS = "NoDataSections"
    MALFORMED_SECTION_HEADER = "MalformedSectionHeader"
    SECTION_NAME_MISMATCH = "SectionNameMismatch"
    UNTERMINATED_HEADER_SECTION = "UnterminatedHeaderSection"
    UNTERMINATED_SECTION = "UnterminatedSection"
    EMPTY_RECORD = "EmptyRecord"
    UNTERMINATED_RECORD = "UnterminatedRecord"
    TRAILING_CONTENT = "TrailingContent"
    UNEXPECTED_TOKEN = "UnexpectedToken"


class SourcePosition(BaseModel):
    """Location of a failure in the input text.

    Attributes:
        offset: 0-based character offset.
        line: 1-based line number.
        column: 1-based column number.
    """

    offset: int = Field(default=0, ge=0)
    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class Diagnostic(BaseModel):
    """A position-tagged description of a parse failure.

    Attributes:
        kind: The failing grammar rule.
        message: Human readable description.
        position: Where the failure was detected.
        expected: Opening section name (SectionNameMismatch only).
        found: Closing section name actually read (SectionNameMismatch only).
        source: File name, when the text was read from disk.
    """

    kind: ErrorKind
    message: str
    position: SourcePosition = Field(default_factory=SourcePosition)
    expected: Optional[str] = None
    found: Optional[str] = None
    source: Optional[str] = None

    model_config = {"frozen": True}

    def __str__(self) -> str:
        if self.source:
            where = f"{self.source}:{self.position.line}:{self.position.column}"
        else:
            where = str(self.position)
        return f"{where}: {self.kind.value}: {self.message}"


class IDFSyntaxError(ValueError):
    """Raised when IDF text does not conform to the grammar.

    Attributes:
        diagnostic: The single failure that aborted the parse.
    """

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(str(diagnostic))

    @property
    def kind(self) -> ErrorKind:
        return self.diagnostic.kind

    @property
    def position(self) -> SourcePosition:
        return self.diagnostic.position

    def with_source(self, source: str) -> "IDFSyntaxError":
        """Returns a copy of this error tagged with a file name."""
        return IDFSyntaxError(self.diagnostic.model_copy(update={"source": source}))
