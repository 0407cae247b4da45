"""Tests for reader configuration and settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from edgeline.contracts.enums import OutputFormat
from edgeline.core.config import (
    DELIMITER_KEY,
    EDGE_VALUE_KEY,
    REVERSE_DUPLICATOR_KEY,
    IngestSettings,
    ReaderConfiguration,
    load_settings,
    parse_flag,
)


class TestParseFlag:
    @pytest.mark.parametrize("value", ["true", "TRUE", "True", " true "])
    def test_true_spellings(self, value: str) -> None:
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["false", "yes", "1", "", "on"])
    def test_everything_else_is_false(self, value: str) -> None:
        assert parse_flag(value) is False

    def test_none_is_false(self) -> None:
        assert parse_flag(None) is False

    def test_bool_passes_through(self) -> None:
        assert parse_flag(True) is True
        assert parse_flag(False) is False


class TestReaderConfiguration:
    def test_defaults_from_empty_conf(self) -> None:
        config = ReaderConfiguration.from_job_conf({}, default_value="1")

        assert config.delimiter == ","
        assert config.default_value == "1"
        assert config.reverse_duplicate is False

    def test_conf_overrides_everything(self) -> None:
        config = ReaderConfiguration.from_job_conf(
            {DELIMITER_KEY: "\t", EDGE_VALUE_KEY: "7", REVERSE_DUPLICATOR_KEY: "true"},
            default_value="1",
        )

        assert config.delimiter == "\t"
        assert config.default_value == "7"
        assert config.reverse_duplicate is True

    def test_codec_default_used_when_conf_omits_value(self) -> None:
        config = ReaderConfiguration.from_job_conf({DELIMITER_KEY: ";"}, default_value="1.0")

        assert config.default_value == "1.0"

    def test_none_values_count_as_unset(self) -> None:
        config = ReaderConfiguration.from_job_conf(
            {DELIMITER_KEY: None, EDGE_VALUE_KEY: None, REVERSE_DUPLICATOR_KEY: None},
            default_value="1",
        )

        assert config.delimiter == ","
        assert config.default_value == "1"
        assert config.reverse_duplicate is False

    def test_empty_delimiter_rejected(self) -> None:
        with pytest.raises(ValidationError, match="delimiter cannot be empty"):
            ReaderConfiguration.from_job_conf({DELIMITER_KEY: ""}, default_value="1")

    def test_is_frozen(self) -> None:
        config = ReaderConfiguration.from_job_conf({}, default_value="1")

        with pytest.raises(ValidationError):
            config.delimiter = ";"  # type: ignore[misc]

    def test_later_conf_changes_do_not_leak(self) -> None:
        conf = {DELIMITER_KEY: ","}
        config = ReaderConfiguration.from_job_conf(conf, default_value="1")

        conf[DELIMITER_KEY] = ";"

        assert config.delimiter == ","


class TestIngestSettings:
    def test_defaults(self) -> None:
        settings = IngestSettings()

        assert settings.codec == "text"
        assert settings.inputs == []
        assert settings.workers == 1
        assert settings.output_format == OutputFormat.TSV
        assert settings.logging.level == "INFO"

    def test_to_job_conf_omits_unset_default_value(self) -> None:
        conf = IngestSettings(delimiter="|").to_job_conf()

        assert conf == {DELIMITER_KEY: "|", REVERSE_DUPLICATOR_KEY: "false"}

    def test_to_job_conf_with_all_fields(self) -> None:
        conf = IngestSettings(default_value="2", reverse_duplicate=True).to_job_conf()

        assert conf[EDGE_VALUE_KEY] == "2"
        assert conf[REVERSE_DUPLICATOR_KEY] == "true"

    def test_numeric_default_value_becomes_text(self) -> None:
        assert IngestSettings(default_value=1).default_value == "1"  # type: ignore[arg-type]

    def test_workers_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            IngestSettings(workers=0)

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            IngestSettings(delimeter=",")  # type: ignore[call-arg]

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown log level"):
            IngestSettings(logging={"level": "chatty"})  # type: ignore[arg-type]


class TestLoadSettings:
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "codec: long\n"
            "inputs:\n"
            "  - a.csv\n"
            "  - b.csv\n"
            "delimiter: ';'\n"
            "default_value: 3\n"
            "reverse_duplicate: true\n"
            "workers: 2\n"
            "output_format: jsonl\n"
            "logging:\n"
            "  level: debug\n"
        )

        settings = load_settings(path)

        assert settings.codec == "long"
        assert settings.inputs == ["a.csv", "b.csv"]
        assert settings.delimiter == ";"
        assert settings.default_value == "3"
        assert settings.reverse_duplicate is True
        assert settings.workers == 2
        assert settings.output_format == OutputFormat.JSONL
        assert settings.logging.level == "DEBUG"

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("codec: long\nworkers: 1\n")
        monkeypatch.setenv("EDGELINE_WORKERS", "4")

        settings = load_settings(path)

        assert settings.workers == 4

    def test_env_var_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("inputs:\n  - ${EDGE_DIR}/edges.csv\n  - ${MISSING_DIR:-fallback}/more.csv\n")
        monkeypatch.setenv("EDGE_DIR", "/data")
        monkeypatch.delenv("MISSING_DIR", raising=False)

        settings = load_settings(path)

        assert settings.inputs == ["/data/edges.csv", "fallback/more.csv"]

    def test_invalid_values_raise_validation_error(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("workers: 0\n")

        with pytest.raises(ValidationError):
            load_settings(path)
