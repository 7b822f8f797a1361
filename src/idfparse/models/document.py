"""Document model for parsed IDF 3.0 files.

The model is a plain, immutable tree mirroring the file structure: one header
section followed by one or more data sections, each holding ordered records of
typed values. No semantic interpretation (geometry, placement, units) is
performed here.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


class IntegerValue(BaseModel):
    """Signed 64-bit integer literal (e.g. ``0``, ``-12``)."""

    kind: Literal["integer"] = "integer"
    value: int = Field(ge=-(2**63), le=2**63 - 1)

    model_config = {"frozen": True}


class FloatValue(BaseModel):
    """Decimal literal with a fractional part (e.g. ``10.5``)."""

    kind: Literal["float"] = "float"
    value: float

    model_config = {"frozen": True}


class StringValue(BaseModel):
    """Unquoted string token.

    Inside data sections this is always letter-first; header records also
    store digit-first tokens such as ``3.0`` here.
    """

    kind: Literal["string"] = "string"
    value: str = Field(min_length=1)

    model_config = {"frozen": True}


class QuotedStringValue(BaseModel):
    """Single or double quoted string, delimiters stripped."""

    kind: Literal["quoted_string"] = "quoted_string"
    value: str

    model_config = {"frozen": True}


Value = Annotated[
    Union[IntegerValue, FloatValue, StringValue, QuotedStringValue],
    Field(discriminator="kind"),
]
HeaderValue = Annotated[
    Union[StringValue, QuotedStringValue],
    Field(discriminator="kind"),
]


class Record(BaseModel):
    """One line of values inside a data section.

    Attributes:
        values: Values in source order (never empty).
        line: Line number the record starts on.
    """

    values: tuple[Value, ...] = Field(min_length=1)
    line: int = 0

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.values)

    def raw(self) -> list:
        """Returns the bare Python values (int, float or str)."""
        return [v.value for v in self.values]


class StringOnlyRecord(BaseModel):
    """One line of string or quoted-string values inside the header section."""

    values: tuple[HeaderValue, ...] = Field(min_length=1)
    line: int = 0

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.values)

    def raw(self) -> list[str]:
        return [v.value for v in self.values]


class SectionHeader(BaseModel):
    """Opening line of a section: ``.NAME [attribute ...]``.

    Attributes:
        name: Section name without the leading dot (e.g. "BOARD_OUTLINE").
        attributes: Free-form bare strings following the name (e.g. "ECAD").
        line: Line number of the opening marker.
    """

    name: str = Field(min_length=1)
    attributes: tuple[str, ...] = ()
    line: int = 0

    model_config = {"frozen": True}


class _NamedSection(BaseModel):
    header: SectionHeader
    closing_name: str

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_closing_name(self):
        if self.closing_name != self.header.name:
            raise ValueError(
                f"Closing section name '{self.closing_name}' does not match '{self.header.name}'"
            )
        return self

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def attributes(self) -> tuple[str, ...]:
        return self.header.attributes


class HeaderSection(_NamedSection):
    """The mandatory first section, restricted to string-only records."""

    records: tuple[StringOnlyRecord, ...] = Field(min_length=1)


class Section(_NamedSection):
    """A data section; zero records is legal."""

    records: tuple[Record, ...] = ()


class Document(BaseModel):
    """Root of a parsed IDF file.

    Attributes:
        name: Label for the document (file stem or caller supplied).
        header: The header section.
        sections: Data sections in source order (at least one).
    """

    name: str = "unknown"
    header: HeaderSection
    sections: tuple[Section, ...] = Field(min_length=1)

    model_config = {"frozen": True}

    @property
    def section_names(self) -> list[str]:
        return [s.name for s in self.sections]

    def find_sections(self, name: str) -> list[Section]:
        """Returns every data section with the given name, in source order."""
        return [s for s in self.sections if s.name == name]

    def record_count(self) -> int:
        """Total number of data records across all sections."""
        return sum(len(s.records) for s in self.sections)
