#!/usr/bin/env python3
"""
Static type-checking tests.

Mixed-tag arithmetic is rejected twice: by the type checker before the
program runs, and by IncompatibleUnitsError at runtime. These tests run mypy
over the fixtures in tests/typing_fixtures/ and compare the reported error
lines with the lines marked ``# E``.

Run with: python -m pytest tests/test_static_typing.py -v
"""

import os
import re

import pytest

mypy_api = pytest.importorskip("mypy.api")

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

ERROR_LINE = re.compile(r"^(?P<path>[^:]+):(?P<line>\d+): error:")


def _marked_lines(path):
    with open(path) as f:
        return {number for number, line in enumerate(f, start=1) if line.rstrip().endswith("# E")}


def _mypy_error_lines(path, tmp_path):
    stdout, stderr, _ = mypy_api.run(
        [
            "--follow-imports=silent",
            "--ignore-missing-imports",
            "--no-error-summary",
            "--cache-dir",
            str(tmp_path / ".mypy_cache"),
            path,
        ]
    )
    assert "Traceback" not in stderr, stderr
    lines = set()
    for output_line in stdout.splitlines():
        match = ERROR_LINE.match(output_line)
        if match and os.path.basename(match.group("path")) == os.path.basename(path):
            lines.add(int(match.group("line")))
    return lines, stdout


@pytest.fixture
def in_root(monkeypatch):
    """Run mypy from the repository root so it finds stellare_types."""
    monkeypatch.chdir(ROOT)


@pytest.mark.usefixtures("in_root")
class TestStaticTyping:
    """Tests that the type checker sees the dimension tags."""

    def test_mismatched_tags_are_errors(self, tmp_path):
        path = os.path.join("tests", "typing_fixtures", "unit_mismatch.py")
        expected = _marked_lines(os.path.join(ROOT, path))
        assert expected, "fixture has no marked lines"
        reported, stdout = _mypy_error_lines(path, tmp_path)
        assert reported == expected, stdout

    def test_valid_usage_has_no_errors(self, tmp_path):
        path = os.path.join("tests", "typing_fixtures", "valid_usage.py")
        reported, stdout = _mypy_error_lines(path, tmp_path)
        assert reported == set(), stdout


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
