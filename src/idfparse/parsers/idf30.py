"""IDF 3.0 (.emn / .emp / .idf) structural parser.

Recursive descent over the scanner's token stream, one method per grammar
rule::

    document       = NEWLINE* header_section NEWLINE* (section NEWLINE*)+ EOI
    header_section = section_header string_only_record+ SECTION_NAME NEWLINE
    section        = section_header record* SECTION_NAME (NEWLINE | EOI)
    section_header = SECTION_NAME WORD* NEWLINE
    record         = (WORD | NUMBER | QUOTED_STRING)+ NEWLINE

The first failure aborts the parse with an :class:`IDFSyntaxError`; there is
no recovery and no partial document.

Reference: IDF Version 3.0, Intermediate Data Format for Mechanical/Electrical
Interaction.
"""

import logging
from pathlib import Path
from typing import Optional

from lark import Token

from ..exceptions import Diagnostic, ErrorKind, IDFSyntaxError
from ..models.document import (
    Document,
    HeaderSection,
    Record,
    Section,
    SectionHeader,
    StringOnlyRecord,
)
from .base import BaseParser
from .scanner import EOI, NEWLINE, SECTION_NAME, WORD, Scanner, position_of
from .values import is_value_token, read_header_value, read_value

logger = logging.getLogger(__name__)


def _describe(token: Token) -> str:
    if token.type == EOI:
        return "end of input"
    if token.type == NEWLINE:
        return "line break"
    return f"'{token}'"


class IDF30Parser(BaseParser[Document]):
    """Parser for IDF 3.0 board, panel and library files.

    Produces a :class:`Document` holding the raw section/record structure.
    A parser instance is not shared between threads; each call to
    :meth:`parse_string` starts from a fresh token stream.
    """

    def parse(self, path: Path, encoding: str = "utf-8", errors: str = "strict") -> Document:
        """Parses an IDF file from a given path.

        Args:
            path: Path to the file (``.gz`` files are decompressed).
            encoding: Text encoding of the file.
            errors: Error handling scheme for encoding errors.

        Returns:
            The parsed Document, named after the file stem.

        Raises:
            IDFSyntaxError: With the diagnostic tagged by the file name.
        """
        logger.info(f"Parsing IDF file: {path}")
        content = self._read_file(path, encoding=encoding, errors=errors)
        name = path.name.split(".")[0]
        try:
            return self.parse_string(content, name)
        except IDFSyntaxError as e:
            raise e.with_source(path.name) from None

    def parse_string(self, content: str, name: str = "unknown") -> Document:
        """Parses IDF content from a string.

        Args:
            content: The IDF text (``\\n`` line endings).
            name: Name for the document.

        Returns:
            The parsed Document.
        """
        logger.debug(f"Parsing content string, length: {len(content)}")
        self._init_tokens(Scanner(content))
        document = self._parse_document(name)
        logger.debug(
            f"Parsed {len(document.sections)} sections, {document.record_count()} records"
        )
        return document

    # === Helpers ===

    def _next(self) -> Token:
        # The scanner always ends with EOI, so the stream is never exhausted early
        token = self._peek()
        assert token is not None
        return token

    def _fail(
        self,
        kind: ErrorKind,
        message: str,
        token: Token,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ) -> IDFSyntaxError:
        return IDFSyntaxError(
            Diagnostic(
                kind=kind,
                message=message,
                position=position_of(token),
                expected=expected,
                found=found,
            )
        )

    def _skip_blank_lines(self) -> None:
        while self._next().type == NEWLINE:
            self._consume()

    # === Grammar rules ===

    def _parse_document(self, name: str) -> Document:
        self._skip_blank_lines()
        token = self._next()
        if token.type != SECTION_NAME:
            raise self._fail(
                ErrorKind.MISSING_HEADER_SECTION,
                f"File must start with a header section, got {_describe(token)}",
                token,
            )
        header = self._parse_header_section()

        sections: list[Section] = []
        self._skip_blank_lines()
        while self._next().type != EOI:
            token = self._next()
            if token.type != SECTION_NAME:
                raise self._fail(
                    ErrorKind.TRAILING_CONTENT,
                    f"Expected a section or end of input, got {_describe(token)}",
                    token,
                )
            sections.append(self._parse_section())
            self._skip_blank_lines()

        if not sections:
            raise self._fail(
                ErrorKind.NO_DATA_SECTIONS,
                "At least one data section must follow the header section",
                self._next(),
            )
        return Document(name=name, header=header, sections=tuple(sections))

    def _parse_section_header(self) -> SectionHeader:
        token = self._next()
        if token.type != SECTION_NAME:
            raise self._fail(
                ErrorKind.MALFORMED_SECTION_HEADER,
                f"Expected a section name, got {_describe(token)}",
                token,
            )
        self._consume()
        attributes = []
        while self._next().type == WORD:
            attributes.append(str(self._consume()))
        end = self._next()
        if end.type != NEWLINE:
            raise self._fail(
                ErrorKind.MALFORMED_SECTION_HEADER,
                f"Section header '{token}' must end with a line break, got {_describe(end)}",
                end,
            )
        self._consume()
        return SectionHeader(name=token[1:], attributes=tuple(attributes), line=token.line)

    def _parse_closing_name(self, header: SectionHeader, unterminated: ErrorKind) -> Token:
        """Consumes the closing section name and checks it against the opening one."""
        token = self._next()
        if token.type == EOI:
            raise self._fail(
                unterminated,
                f"Section '{header.name}' opened on line {header.line} is never closed",
                token,
            )
        closing = token[1:]
        if closing != header.name:
            raise self._fail(
                ErrorKind.SECTION_NAME_MISMATCH,
                f"Section '{header.name}' closed by '{closing}'",
                token,
                expected=header.name,
                found=closing,
            )
        return self._consume()

    def _parse_header_section(self) -> HeaderSection:
        try:
            header = self._parse_section_header()
        except IDFSyntaxError as e:
            if e.kind != ErrorKind.MALFORMED_SECTION_HEADER:
                raise
            # The opening line belongs to the header section rule
            raise IDFSyntaxError(
                e.diagnostic.model_copy(update={"kind": ErrorKind.MISSING_HEADER_SECTION})
            ) from None
        records: list[StringOnlyRecord] = []
        while self._next().type not in (SECTION_NAME, EOI):
            records.append(self._parse_string_only_record())
        if not records:
            raise self._fail(
                ErrorKind.EMPTY_HEADER_SECTION,
                f"Header section '{header.name}' has no records",
                self._next(),
            )

        closing = self._parse_closing_name(header, ErrorKind.UNTERMINATED_HEADER_SECTION)
        end = self._next()
        if end.type == EOI:
            raise self._fail(
                ErrorKind.UNTERMINATED_HEADER_SECTION,
                f"Header section '{header.name}' must be followed by a line break",
                end,
            )
        if end.type != NEWLINE:
            raise self._fail(
                ErrorKind.TRAILING_CONTENT,
                f"Unexpected {_describe(end)} after closing '{closing}'",
                end,
            )
        self._consume()
        return HeaderSection(header=header, records=tuple(records), closing_name=str(closing)[1:])

    def _parse_section(self) -> Section:
        header = self._parse_section_header()
        records: list[Record] = []
        while self._next().type not in (SECTION_NAME, EOI):
            records.append(self._parse_record())

        closing = self._parse_closing_name(header, ErrorKind.UNTERMINATED_SECTION)
        end = self._next()
        if end.type == NEWLINE:
            self._consume()
        elif end.type != EOI:
            raise self._fail(
                ErrorKind.TRAILING_CONTENT,
                f"Unexpected {_describe(end)} after closing '{closing}'",
                end,
            )
        logger.debug(f"Section {header.name}: {len(records)} records")
        return Section(header=header, records=tuple(records), closing_name=str(closing)[1:])

    def _parse_values(self, reader) -> tuple[list, int]:
        """Reads values up to and including the terminating line break."""
        first = self._next()
        if first.type in (NEWLINE, EOI):
            raise self._fail(
                ErrorKind.EMPTY_RECORD,
                f"Expected a record, got {_describe(first)}",
                first,
            )
        values = []
        while True:
            token = self._next()
            if token.type == NEWLINE:
                self._consume()
                return values, first.line
            if token.type == EOI:
                raise self._fail(
                    ErrorKind.UNTERMINATED_RECORD,
                    f"Record starting on line {first.line} is not terminated by a line break",
                    token,
                )
            if not is_value_token(token):
                raise self._fail(
                    ErrorKind.UNEXPECTED_TOKEN,
                    f"Section name {_describe(token)} inside a record",
                    token,
                )
            values.append(reader(self._consume()))

    def _parse_record(self) -> Record:
        values, line = self._parse_values(read_value)
        return Record(values=tuple(values), line=line)

    def _parse_string_only_record(self) -> StringOnlyRecord:
        values, line = self._parse_values(read_header_value)
        return StringOnlyRecord(values=tuple(values), line=line)
