"""Tests for the musparser command line."""

import pytest
from typer.testing import CliRunner

from cli.app import app

runner = CliRunner()


class TestConvertCommand:
    """Test cases for `musparser <infile> <outfile>`."""

    def test_convert(self, mus_file, tmp_path):
        output = tmp_path / "song.mid"
        result = runner.invoke(app, [str(mus_file), str(output)])

        assert result.exit_code == 0
        assert output.read_bytes()[:4] == b"MThd"
        assert "MUS Header" in result.output
        assert "done" in result.output

    def test_instrument_table_shown(self, mus_file, tmp_path):
        result = runner.invoke(app, [str(mus_file), str(tmp_path / "out.mid")])

        assert "Instrument Patches" in result.output
        assert "135" in result.output

    def test_events_listing(self, mus_file, tmp_path):
        result = runner.invoke(app, [str(mus_file), str(tmp_path / "out.mid"), "--events"])

        assert result.exit_code == 0
        assert "program_change" in result.output
        assert "end_of_track" in result.output

    def test_quiet(self, mus_file, tmp_path):
        output = tmp_path / "out.mid"
        result = runner.invoke(app, [str(mus_file), str(output), "--quiet"])

        assert result.exit_code == 0
        assert result.output.strip() == ""
        assert output.exists()

    @pytest.mark.parametrize("args", [[], ["only_one.mus"], ["a.mus", "b.mid", "c.mid"]])
    def test_wrong_argument_count(self, args):
        """Test that anything but two arguments prints usage and does nothing."""
        result = runner.invoke(app, args)

        assert result.exit_code != 0
        assert "Usage" in result.output

    def test_missing_source(self, tmp_path):
        output = tmp_path / "out.mid"
        result = runner.invoke(app, [str(tmp_path / "missing.mus"), str(output)])

        assert result.exit_code == 1
        assert "not found" in result.output
        assert not output.exists()

    def test_truncated_source(self, tmp_path, mus_builder):
        source = tmp_path / "bad.mus"
        source.write_bytes(mus_builder(b"\x10\x3c"))
        output = tmp_path / "bad.mid"

        result = runner.invoke(app, [str(source), str(output)])

        assert result.exit_code == 1
        assert "Unexpected end of data" in result.output
        assert not output.exists()

    def test_strict_rejects_undefined(self, tmp_path, mus_builder):
        source = tmp_path / "odd.mus"
        source.write_bytes(mus_builder(b"\x70\x60"))

        assert runner.invoke(app, [str(source), str(tmp_path / "a.mid")]).exit_code == 0
        result = runner.invoke(app, [str(source), str(tmp_path / "b.mid"), "--strict"])
        assert result.exit_code == 1
        assert "Undefined MUS event action 7" in result.output

    def test_unwritable_output(self, mus_file, tmp_path):
        result = runner.invoke(app, [str(mus_file), str(tmp_path / "nodir" / "out.mid")])

        assert result.exit_code == 1
        assert "Cannot write" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "musparser" in result.output
