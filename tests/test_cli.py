import bz2
import gzip
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import pytest

import xread
from xread.cli.main import app


def invoke(*tokens):
    try:
        app(list(tokens))
    except SystemExit as e:
        if e.code not in (None, 0):
            raise


class TestCli(unittest.TestCase):
    @pytest.fixture(autouse=True)
    def _capsysbinary(self, capsysbinary):
        self.capsysbinary = capsysbinary

    def test_cat_files_to_stdout(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_dir = Path(tmp_dir)
            first = tmp_dir / "first.gz"
            first.write_bytes(gzip.compress(b"foo foo foo\n"))
            second = tmp_dir / "second.txt"
            second.write_bytes(b"bar bar bar\n")

            invoke("cat", str(first), str(second))

        self.assertEqual(self.capsysbinary.readouterr().out, b"foo foo foo\nbar bar bar\n")

    def test_cat_stdin_to_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_dir = Path(tmp_dir)
            output = tmp_dir / "out.txt"
            with mock.patch("sys.stdin", io.TextIOWrapper(io.BytesIO(b"from stdin"))):
                invoke("cat", "--output", str(output))
            self.assertEqual(output.read_bytes(), b"from stdin")

    def test_cat_file_to_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_dir = Path(tmp_dir)
            src = tmp_dir / "in.bz2"
            src.write_bytes(bz2.compress(b"foo foo foo"))
            output = tmp_dir / "out.txt"

            invoke("cat", str(src), "-o", str(output))

            self.assertEqual(output.read_bytes(), b"foo foo foo")

    def test_cat_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with self.assertRaises(xread.FileOpenError):
                invoke("cat", str(Path(tmp_dir) / "missing.gz"))

    def test_version(self):
        invoke("--version")
        self.assertIn(xread.__version__.encode(), self.capsysbinary.readouterr().out)
