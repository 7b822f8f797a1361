"""Data models for parsed IDF documents"""

from .document import (
    Document,
    FloatValue,
    HeaderSection,
    HeaderValue,
    IntegerValue,
    QuotedStringValue,
    Record,
    Section,
    SectionHeader,
    StringOnlyRecord,
    StringValue,
    Value,
)

__all__ = [
    "Document",
    "HeaderSection",
    "Section",
    "SectionHeader",
    "Record",
    "StringOnlyRecord",
    "Value",
    "HeaderValue",
    "IntegerValue",
    "FloatValue",
    "StringValue",
    "QuotedStringValue",
]
