"""Tests for the command line runner."""

import argparse

import pytest

from coastergen.cli import _element_list, main, parse_args
from coastergen.track.elements import TrackElementType


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        """Test default options."""
        args = parse_args([])

        assert args.seed is None
        assert args.target_length_m == 800.0
        assert args.use_fixed_preset is True
        assert args.elements == list(TrackElementType)

    def test_element_list(self):
        """Test comma-separated elements."""
        assert _element_list("hill, loop") == [TrackElementType.HILL, TrackElementType.LOOP]
        assert _element_list("") == []

    def test_unknown_element(self):
        """Test unknown element names are rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            _element_list("corkscrew")


class TestMain:
    """Test the runner end to end."""

    def test_writes_export(self, tmp_path, capsys):
        """Test a run writes the table and prints stats."""
        output = tmp_path / "track.csv"
        preview = tmp_path / "preview.json"

        code = main([
            "--seed", "42",
            "--length", "300",
            "--output", str(output),
            "--preview-json", str(preview),
            "--log-level", "WARNING",
        ])

        assert code == 0
        assert output.read_bytes().startswith(b'"No."\t"PosX"')
        assert preview.exists()
        out = capsys.readouterr().out
        assert "Seed: 42" in out
        assert "Step Used: 1.100m" in out

    def test_bad_extension(self, tmp_path):
        """Test an export failure returns a non-zero code."""
        code = main([
            "--seed", "1",
            "--length", "200",
            "--output", str(tmp_path / "track.json"),
            "--log-level", "ERROR",
        ])

        assert code == 1

    def test_invalid_length(self, tmp_path):
        """Test invalid parameters are reported."""
        code = main([
            "--length", "-5",
            "--output", str(tmp_path / "track.csv"),
            "--log-level", "ERROR",
        ])

        assert code == 2
