"""idfparse: IDF 3.0 board exchange format parser"""

from pathlib import Path
from typing import Optional, Union

from .exceptions import Diagnostic, ErrorKind, IDFSyntaxError, SourcePosition
from .models import Document
from .parsers import IDF30Parser

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("idfparse")
except (ImportError, PackageNotFoundError):
    __version__ = "0.0.0"

__all__ = [
    "parse",
    "parse_file",
    "check",
    "Document",
    "Diagnostic",
    "ErrorKind",
    "IDFSyntaxError",
    "SourcePosition",
]


def parse(text: str, name: str = "unknown") -> Document:
    """Parses IDF text into a Document.

    Raises:
        IDFSyntaxError: On the first grammar violation.
    """
    return IDF30Parser().parse_string(text, name)


def parse_file(path: Union[str, Path], encoding: str = "utf-8") -> Document:
    """Reads and parses an IDF file (plain or .gz)."""
    return IDF30Parser().parse(Path(path), encoding=encoding)


def check(text: str) -> Optional[Diagnostic]:
    """Parses IDF text and returns the failure, or None if it is valid."""
    try:
        parse(text)
    except IDFSyntaxError as e:
        return e.diagnostic
    return None
