from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from snippet_merge import AtomicWriter, CodeMergeError


class TestAtomicWriter:
    """Tests for AtomicWriter."""

    def test_write_creates_file(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "config.ts"
            code = "export const config = { debug: true };\n"
            writer.write(path, code)

            assert path.read_text() == code

    def test_write_overwrites_existing(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.ts"
            path.write_text("const old = 1;\n")
            writer.write(path, "const fresh = 2;\n")

            assert path.read_text() == "const fresh = 2;\n"

    def test_invalid_content_is_not_written(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.ts"
            path.write_text("const old = 1;\n")

            with pytest.raises(CodeMergeError):
                writer.write(path, "const broken = ;\n")

            assert path.read_text() == "const old = 1;\n"
            assert [p.name for p in Path(tmpdir).iterdir()] == ["config.ts"]

    def test_write_without_validation(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "notes.txt"
            writer.write(path, "not code at all (", validate=False)

            assert path.read_text() == "not code at all ("

    def test_custom_validator(self):
        def reject_all(content):
            raise CodeMergeError("rejected")

        writer = AtomicWriter(validate=reject_all)

        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(CodeMergeError):
                writer.write(Path(tmpdir) / "a.ts", "const a = 1;\n")

    def test_write_if_not_exists_raises_on_existing(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "existing.ts"
            path.write_text("const a = 1;\n")

            with pytest.raises(FileExistsError):
                writer.write_if_not_exists(path, "const b = 2;\n")

    def test_write_if_not_exists_writes_new_file(self):
        writer = AtomicWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "new.ts"

            assert writer.write_if_not_exists(path, "const b = 2;\n")
            assert path.read_text() == "const b = 2;\n"
