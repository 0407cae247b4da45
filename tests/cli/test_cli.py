"""Tests for the edgeline CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from edgeline import __version__
from edgeline.cli import app

runner = CliRunner()


@pytest.fixture
def settings_file(tmp_path: Path):
    """Factory: settings_file("codec: long\\n...") -> Path."""

    def _write(body: str) -> Path:
        path = tmp_path / "settings.yaml"
        path.write_text(body, encoding="utf-8")
        return path

    return _write


class TestTopLevel:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"edgeline version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("ingest", "codecs", "validate"):
            assert command in result.output

    def test_missing_env_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--env-file", str(tmp_path / "nope.env"), "codecs"])

        assert result.exit_code == 1
        assert ".env file not found" in result.output


class TestIngest:
    def test_tsv_output(self, edges_file, tmp_path: Path) -> None:
        out = tmp_path / "out.tsv"

        result = runner.invoke(
            app,
            ["--no-dotenv", "ingest", str(edges_file(["A,B,5", "B,C"])), "--codec", "long", "-o", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines() == ["A\tB\t5", "B\tC\t1"]

    def test_jsonl_output(self, edges_file, tmp_path: Path) -> None:
        out = tmp_path / "out.jsonl"

        result = runner.invoke(
            app,
            ["--no-dotenv", "ingest", str(edges_file(["A,B,2.5"])), "-c", "double", "-f", "jsonl", "-o", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert [json.loads(line) for line in out.read_text().splitlines()] == [{"source": "A", "target": "B", "value": 2.5}]

    def test_null_codec_writes_empty_value(self, edges_file, tmp_path: Path) -> None:
        out = tmp_path / "out.tsv"

        result = runner.invoke(app, ["--no-dotenv", "ingest", str(edges_file(["A,B,ignored"])), "-c", "null", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text() == "A\tB\t\n"

    def test_reverse_duplicate(self, edges_file, tmp_path: Path) -> None:
        out = tmp_path / "out.tsv"

        result = runner.invoke(
            app,
            ["--no-dotenv", "ingest", str(edges_file(["A,B,5", "B,C"])), "-c", "long", "--reverse-duplicate", "-o", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines() == ["A\tB\t5", "B\tA\t5", "B\tC\t1", "C\tB\t1"]

    def test_delimiter_and_default_value(self, edges_file, tmp_path: Path) -> None:
        out = tmp_path / "out.tsv"

        result = runner.invoke(
            app,
            ["--no-dotenv", "ingest", str(edges_file(["A|B", "B|C|3"])), "-c", "long", "-d", "|", "--default-value", "7", "-o", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines() == ["A\tB\t7", "B\tC\t3"]

    def test_outputs_follow_input_order(self, edges_file, tmp_path: Path) -> None:
        first = edges_file(["A,B"], name="first.csv")
        second = edges_file(["C,D"], name="second.csv")
        out = tmp_path / "out.tsv"

        result = runner.invoke(app, ["--no-dotenv", "ingest", str(first), str(second), "-w", "2", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines() == ["A\tB\t", "C\tD\t"]

    def test_invalid_line_fails_run(self, edges_file) -> None:
        path = edges_file(["A,B,5", "B,C,heavy"])

        result = runner.invoke(app, ["--no-dotenv", "ingest", str(path), "-c", "long"])

        assert result.exit_code == 1
        assert f"{path}:2:" in result.output
        assert "is not an integer" in result.output

    def test_malformed_line_fails_run(self, edges_file) -> None:
        result = runner.invoke(app, ["--no-dotenv", "ingest", str(edges_file(["A"]))])

        assert result.exit_code == 1
        assert "expected source and target" in result.output

    def test_missing_input_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "ingest", str(tmp_path / "missing.csv")])

        assert result.exit_code == 1
        assert "Cannot open split" in result.output

    def test_no_inputs(self) -> None:
        result = runner.invoke(app, ["--no-dotenv", "ingest"])

        assert result.exit_code == 1
        assert "No input files" in result.output

    def test_unknown_codec(self, edges_file) -> None:
        result = runner.invoke(app, ["--no-dotenv", "ingest", str(edges_file(["A,B"])), "-c", "weight"])

        assert result.exit_code == 1
        assert "Unknown codec 'weight'" in result.output

    def test_invalid_workers(self, edges_file) -> None:
        result = runner.invoke(app, ["--no-dotenv", "ingest", str(edges_file(["A,B"])), "-w", "0"])

        assert result.exit_code == 1
        assert "workers" in result.output

    def test_settings_file(self, edges_file, settings_file, tmp_path: Path) -> None:
        path = edges_file(["A;B", "B;C;-2"])
        config = settings_file(
            f"codec: long\ndelimiter: ';'\ndefault_value: 4\ninputs:\n  - {path}\nlogging:\n  level: warning\n"
        )
        out = tmp_path / "out.tsv"

        result = runner.invoke(app, ["--no-dotenv", "ingest", "-s", str(config), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines() == ["A\tB\t4", "B\tC\t-2"]

    def test_codec_options_from_settings(self, edges_file, settings_file) -> None:
        path = edges_file(["A,B,-2"])
        config = settings_file(f"codec: long\ncodec_options:\n  allow_negative: false\ninputs:\n  - {path}\n")

        result = runner.invoke(app, ["--no-dotenv", "ingest", "-s", str(config)])

        assert result.exit_code == 1
        assert "is negative" in result.output

    def test_command_line_overrides_settings_file(self, edges_file, settings_file, tmp_path: Path) -> None:
        path = edges_file(["A,B"])
        config = settings_file(f"codec: text\ninputs:\n  - {path}\n")
        out = tmp_path / "out.tsv"

        result = runner.invoke(app, ["--no-dotenv", "ingest", "-s", str(config), "-c", "long", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines() == ["A\tB\t1"]

    def test_missing_settings_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-dotenv", "ingest", "-s", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Settings file not found" in result.output

    def test_invalid_settings_reported_per_field(self, settings_file) -> None:
        config = settings_file("codec: long\nworkers: 0\nbogus: 1\n")

        result = runner.invoke(app, ["--no-dotenv", "ingest", "-s", str(config)])

        assert result.exit_code == 1
        assert "Configuration errors:" in result.output
        assert "workers" in result.output
        assert "bogus" in result.output


class TestCodecs:
    def test_lists_builtin_codecs(self) -> None:
        result = runner.invoke(app, ["--no-dotenv", "codecs"])

        assert result.exit_code == 0
        for name in ("double", "long", "null", "text"):
            assert name in result.output
        assert "default='1'" in result.output

    def test_codec_info_is_frozen(self) -> None:
        from edgeline.cli import CodecInfo

        info = CodecInfo(name="long", default_value="1", description="integers")

        with pytest.raises(AttributeError):
            info.name = "double"  # type: ignore[misc]


class TestValidate:
    def test_valid_settings(self, edges_file, settings_file) -> None:
        config = settings_file(f"codec: double\nreverse_duplicate: true\ninputs:\n  - {edges_file(['A,B'])}\n")

        result = runner.invoke(app, ["--no-dotenv", "validate", "-s", str(config)])

        assert result.exit_code == 0, result.output
        assert "Settings valid." in result.output
        assert "Codec: double" in result.output
        assert "Reverse duplicate: True" in result.output

    def test_missing_input(self, settings_file, tmp_path: Path) -> None:
        config = settings_file(f"inputs:\n  - {tmp_path / 'missing.csv'}\n")

        result = runner.invoke(app, ["--no-dotenv", "validate", "-s", str(config)])

        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_unknown_codec(self, settings_file) -> None:
        config = settings_file("codec: weight\n")

        result = runner.invoke(app, ["--no-dotenv", "validate", "-s", str(config)])

        assert result.exit_code == 1
        assert "Unknown codec 'weight'" in result.output

    def test_invalid_codec_options(self, settings_file) -> None:
        config = settings_file("codec: text\ncodec_options:\n  strip: true\n")

        result = runner.invoke(app, ["--no-dotenv", "validate", "-s", str(config)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
