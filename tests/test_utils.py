"""Unit tests for modgen.utils name helpers and console output."""

from __future__ import annotations

import pytest

from modgen.utils import (
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    slugify,
    to_class_name,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# slugify
# ---------------------------------------------------------------------------


class TestSlugify:
    def test_simple_name(self):
        assert slugify("My Module") == "my-module"

    def test_special_chars(self):
        assert slugify("Web Connector 2.0") == "web-connector-2-0"

    def test_leading_trailing_stripped(self):
        assert slugify("  --Charts--  ") == "charts"

    def test_consecutive_separators_collapsed(self):
        assert slugify("a  _ b") == "a-b"

    def test_empty_string(self):
        assert slugify("") == ""

    def test_only_symbols(self):
        assert slugify("!!!") == ""


# ---------------------------------------------------------------------------
# to_class_name
# ---------------------------------------------------------------------------


class TestToClassName:
    def test_two_words(self):
        assert to_class_name("My Module") == "MyModule"

    def test_lowercase_words(self):
        assert to_class_name("tag history splitter") == "TagHistorySplitter"

    def test_acronyms_preserved(self):
        assert to_class_name("OMRON driver") == "OMRONDriver"

    def test_separators_dropped(self):
        assert to_class_name("web-connector_2.0") == "WebConnector20"

    def test_single_word(self):
        assert to_class_name("charts") == "Charts"


# ---------------------------------------------------------------------------
# Console helpers
# ---------------------------------------------------------------------------


class TestConsoleHelpers:
    def test_print_success(self, capsys):
        print_success("done")
        assert "done" in capsys.readouterr().out

    def test_print_error(self, capsys):
        print_error("broken")
        assert "broken" in capsys.readouterr().out

    def test_print_warning(self, capsys):
        print_warning("careful")
        assert "careful" in capsys.readouterr().out

    def test_summary_table(self, capsys):
        print_summary_table({"Module": "Charts", "Files written": "9"}, title="Result")
        out = capsys.readouterr().out
        assert "Result" in out
        assert "Charts" in out
        assert "Files written" in out
