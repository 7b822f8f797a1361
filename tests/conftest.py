"""Pytest configuration and fixtures.

Provides shared fixtures for IDF content/files used across multiple tests.
"""

import tempfile
import textwrap
from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def minimal_idf_content():
    """Provides the smallest useful IDF document.

    Contains:
    - HEADER section with one string-only record of 4 tokens.
    - BOARD_OUTLINE section with one numeric record.
    """
    return textwrap.dedent("""\
    .HEADER
    boardfile 3.0 "2024-01-01" someunit
    .HEADER
    .BOARD_OUTLINE
    1 0 10.5 20.25
    .BOARD_OUTLINE
    """)


@pytest.fixture
def sample_idf_content():
    """Provides a sample board file as a string.

    Contains:
    - Comment lines and a two-record HEADER section.
    - BOARD_OUTLINE with an owner attribute and a closed outline loop.
    - DRILLED_HOLES with quoted and bare strings mixed with numbers.
    - An empty NOTES section closed at end of input (no trailing newline).
    """
    return textwrap.dedent("""\
    # Generated by a test fixture
    .HEADER
    BOARD_FILE 3.0 "Sample ECAD 1.0" 2024/01/01.12:00:00 1
    sample_board MM
    .HEADER
    .BOARD_OUTLINE ECAD
    1.6
    0 0.0 0.0 0.0
    0 100.0 0.0 0.0
    0 100.0 80.0 0.0
    0 0.0 80.0 0.0
    0 0.0 0.0 0.0
    .BOARD_OUTLINE
    .DRILLED_HOLES
    3.2 5.0 5.0 NPTH BOARD MTG UNOWNED
    # via under U1
    0.8 20.0 10.0 PTH U1 PIN 'ECAD'
    .DRILLED_HOLES
    .NOTES
    .NOTES""")


@pytest.fixture
def sample_idf_file(sample_idf_content):
    """Creates a temporary .emn file populated with sample content.

    Yields:
        Path to the temporary file. Auto-deletes on cleanup.
    """
    with tempfile.NamedTemporaryFile(mode="w", suffix=".emn", delete=False) as f:
        f.write(sample_idf_content)
        path = Path(f.name)
    yield path
    path.unlink()


@pytest.fixture
def runner():
    return CliRunner()
