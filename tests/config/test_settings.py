"""Tests for Settings loading from defaults, environment and TOML files."""

import os
from pathlib import Path

import pytest

from findstr.config import Settings, load_settings
from findstr.shared.errors import ApplicationError, ErrorCode


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("FINDSTR_"):
            monkeypatch.delenv(name)


class TestSettings:
    """Test cases for the Settings model."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.search.ignore_case is False
        assert settings.search.recurse is True
        assert settings.search.encoding == "utf-8"
        assert settings.search.encoding_errors == "replace"
        assert settings.pipeline.reader_workers == 4
        assert settings.pipeline.matcher_workers == 2
        assert settings.pipeline.queue_size == 1000
        assert settings.logging.level == "WARNING"

    def test_nested_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FINDSTR_SEARCH__IGNORE_CASE", "true")
        monkeypatch.setenv("FINDSTR_PIPELINE__READER_WORKERS", "8")

        settings = Settings()

        assert settings.search.ignore_case is True
        assert settings.pipeline.reader_workers == 8

    def test_log_level_is_normalized(self) -> None:
        assert Settings(logging={"level": "debug"}).logging.level == "DEBUG"

    def test_from_toml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "findstr.toml"
        config.write_text(
            '[search]\nencoding = "latin-1"\n\n[pipeline]\nqueue_size = 16\n',
            encoding="utf-8",
        )

        settings = Settings.from_toml_file(config)

        assert settings.search.encoding == "latin-1"
        assert settings.pipeline.queue_size == 16
        assert settings.pipeline.reader_workers == 4

    def test_from_missing_toml_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_toml_file(tmp_path / "missing.toml")


class TestLoadSettings:
    """Test cases for load_settings error translation."""

    def test_without_file(self) -> None:
        assert load_settings() == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ApplicationError) as exc_info:
            load_settings(tmp_path / "missing.toml")

        assert exc_info.value.code == ErrorCode.CONFIG_ERROR
        assert exc_info.value.context.additional_data == {"config_key": "config_file"}

    def test_malformed_file(self, tmp_path: Path) -> None:
        config = tmp_path / "bad.toml"
        config.write_text("[search\nignore_case = ", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(config)

        assert "Malformed configuration file" in exc_info.value.message

    @pytest.mark.parametrize(
        ("content", "key"),
        [
            ("[pipeline]\nreader_workers = 0\n", "pipeline.reader_workers"),
            ('[search]\nencoding = "no-such-codec"\n', "search.encoding"),
            ('[logging]\nlevel = "LOUD"\n', "logging.level"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str, key: str) -> None:
        config = tmp_path / "invalid.toml"
        config.write_text(content, encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(config)

        assert exc_info.value.code == ErrorCode.CONFIG_ERROR
        assert f"Invalid configuration value for {key}" in exc_info.value.message
