import gzip
import pytest
from lark import Token
from idfparse.parsers.base import BaseParser

class DummyParser(BaseParser):
    def parse(self, path):
        return "parsed"

    def parse_string(self, content, name="unknown"):
        return content

def test_read_file_plain(tmp_path):
    parser = DummyParser()
    f = tmp_path / "test.txt"
    f.write_text("hello world", encoding="utf-8")

    assert parser._read_file(f) == "hello world"

def test_read_file_gzip(tmp_path):
    parser = DummyParser()
    f = tmp_path / "test.txt.gz"
    with gzip.open(f, "wt", encoding="utf-8") as gf:
        gf.write("hello gzip")

    assert parser._read_file(f) == "hello gzip"

def test_read_file_universal_newlines(tmp_path):
    parser = DummyParser()
    f = tmp_path / "test.emn"
    f.write_bytes(b"a\r\nb\r\n")

    assert parser._read_file(f) == "a\nb\n"

def test_tokenizer_methods():
    parser = DummyParser()
    tokens = [Token("WORD", "A"), Token("WORD", "B"), Token("WORD", "C")]
    parser._init_tokens(tokens)

    # Peek
    assert parser._peek() == "A"
    assert parser._peek(1) == "B"
    assert parser._peek(2) == "C"
    assert parser._peek(3) is None

    # Consume
    assert parser._consume() == "A"
    assert parser._peek() == "B"
    assert parser._consume() == "B"
    assert parser._consume() == "C"

    # End of stream
    assert parser._consume() is None
    assert parser._peek() is None

def test_token_stream_is_pulled_lazily():
    pulled = []

    def stream():
        for value in "XYZ":
            pulled.append(value)
            yield Token("WORD", value)

    parser = DummyParser()
    parser._init_tokens(stream())
    assert pulled == []

    parser._peek()
    assert pulled == ["X"]

    parser._consume()
    parser._peek()
    assert pulled == ["X", "Y"]
