"""Tests for SearchOptions."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from findstr.config import SearchOptions, Settings


class TestSearchOptions:
    """Test cases for SearchOptions."""

    def test_defaults(self, tmp_path: Path) -> None:
        options = SearchOptions(pattern="foo", root=tmp_path)

        assert options.file_glob == "*"
        assert options.ignore_case is False
        assert options.recurse is True
        assert options.reader_workers == 4
        assert options.matcher_workers == 2

    def test_is_immutable(self, tmp_path: Path) -> None:
        options = SearchOptions(pattern="foo", root=tmp_path)

        with pytest.raises(ValidationError):
            options.pattern = "bar"  # type: ignore[misc]

    def test_root_defaults_to_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert SearchOptions(pattern="foo").root.resolve() == tmp_path.resolve()

    @pytest.mark.parametrize(
        "values",
        [
            {"reader_workers": 0},
            {"matcher_workers": 0},
            {"queue_size": 0},
            {"poll_interval": 0},
            {"encoding": "no-such-codec"},
            {"encoding": "base64"},
            {"encoding": "rot13"},
            {"encoding_errors": "no-such-handler"},
        ],
    )
    def test_rejects_invalid_values(self, values: dict) -> None:
        with pytest.raises(ValidationError):
            SearchOptions(pattern="foo", **values)


class TestFromSettings:
    """Test cases for SearchOptions.from_settings."""

    def test_uses_configuration_values(self, tmp_path: Path) -> None:
        settings = Settings(search={"ignore_case": True}, pipeline={"queue_size": 10})

        options = SearchOptions.from_settings(settings, "foo", tmp_path, "*.py")

        assert options.ignore_case is True
        assert options.queue_size == 10
        assert options.file_glob == "*.py"
        assert options.root == tmp_path

    def test_overrides_win_and_none_is_ignored(self, tmp_path: Path) -> None:
        settings = Settings(search={"ignore_case": True, "recurse": True})

        options = SearchOptions.from_settings(
            settings,
            "foo",
            tmp_path,
            ignore_case=None,
            recurse=False,
            reader_workers=1,
        )

        assert options.ignore_case is True
        assert options.recurse is False
        assert options.reader_workers == 1
