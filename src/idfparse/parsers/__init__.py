"""Parsers for IDF text"""

from .base import BaseParser
from .idf30 import IDF30Parser
from .scanner import Scanner

__all__ = [
    "BaseParser",
    "IDF30Parser",
    "Scanner",
]
