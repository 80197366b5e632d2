"""Tests for print option merging and validation."""

import logging

import pytest

from errors import InvalidOption
from print_options import PrintOptions, default_options, merge_options


class TestMergeOptions:
    """Tests for merge_options."""

    def test_none_gives_defaults(self):
        assert merge_options(None) == PrintOptions(
            beep=False, cut=False, tailing_line=False, encoding="UTF8", codepage=0, col_width=32
        )

    def test_defaults_are_fresh(self):
        """Each call builds a new record."""
        assert default_options() is not default_options()

    def test_partial_override(self):
        options = merge_options({"cut": True, "codepage": 6})
        assert options.cut is True
        assert options.codepage == 6
        assert options.beep is False
        assert options.col_width == 32

    def test_camel_case_keys(self):
        options = merge_options({"tailingLine": True, "colWidth": 48})
        assert options.tailing_line is True
        assert options.col_width == 48

    def test_options_record_passes_through(self):
        options = PrintOptions(beep=True)
        assert merge_options(options) is options

    def test_unknown_keys_are_ignored(self, caplog):
        caplog.set_level(logging.WARNING)
        options = merge_options({"paperWidth": 80})
        assert options == default_options()
        assert "paperWidth" in caplog.text


class TestValidation:
    """Tests for PrintOptions range checks."""

    @pytest.mark.parametrize("codepage", [-1, 256, "6", True])
    def test_invalid_codepage(self, codepage):
        with pytest.raises(InvalidOption):
            merge_options({"codepage": codepage})

    @pytest.mark.parametrize("col_width", [0, -5, 3.5, None])
    def test_invalid_col_width(self, col_width):
        with pytest.raises(InvalidOption):
            merge_options({"colWidth": col_width})

    @pytest.mark.parametrize(
        "name, value", [("cut", "false"), ("beep", 0), ("beep", 1), ("tailingLine", "true"), ("cut", None)]
    )
    def test_non_boolean_flags_rejected(self, name, value):
        """Flags only accept real booleans; strings and ints are not coerced."""
        with pytest.raises(InvalidOption):
            merge_options({name: value})

    def test_boundary_values(self):
        options = PrintOptions(codepage=255, col_width=1)
        assert options.codepage == 255
        assert options.col_width == 1
