from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import CONFIG_FILENAME, ConfigError, load_config


def _write_config(project_root: Path, toml_content: str) -> None:
    (project_root / CONFIG_FILENAME).write_text(toml_content, encoding="utf-8")


def test_unknown_section_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[layers]
unclassified = "deny"
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "exclude = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize("content", ["max_file_bytes = 0", "summary_top_n = 0"])
def test_out_of_range_values_rejected(tmp_path: Path, content: str) -> None:
    _write_config(tmp_path, content)

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
output_dir = "build/map"
include = ["src/**"]
exclude = ["node_modules/**"]
nested_gitignore = true
max_file_bytes = 2048
summary_top_n = 3
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.output_dir == "build/map"
    assert config.include == ["src/**"]
    assert config.exclude == ["node_modules/**"]
    assert config.nested_gitignore is True
    assert config.max_file_bytes == 2048
    assert config.summary_top_n == 3


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output_dir == ".codemap"
    assert config.nested_gitignore is False


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".codemap"
    assert config.include == []
    assert config.exclude == []
    assert config.summary_top_n == 10
