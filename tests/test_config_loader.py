# tests/test_config_loader.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from seqkit.config.loader import load_document, load_run_config
from seqkit.config.types import ConfigError, RunConfig, UnsupportedConfigFormatError


# -------------------------
# Helpers
# -------------------------


def write_text(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def write_json(path: Path, obj: object) -> Path:
    path.write_text(json.dumps(obj), encoding="utf-8")
    return path


# -------------------------
# Basic file/path errors
# -------------------------


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_run_config(tmp_path / "missing.yaml")


def test_path_is_dir_raises_config_error(tmp_path: Path) -> None:
    d = tmp_path / "dir"
    d.mkdir()
    with pytest.raises(ConfigError):
        load_run_config(d)


def test_unsupported_extension_raises_unsupported_format(tmp_path: Path) -> None:
    p = write_text(tmp_path / "config.txt", "commands: []")
    with pytest.raises(UnsupportedConfigFormatError):
        load_document(p)


# -------------------------
# Parse errors are wrapped
# -------------------------


@pytest.mark.parametrize(
    "name, content",
    [
        ("config.yaml", "commands: [\n"),
        ("config.toml", "commands = ["),
        ("config.json", '{"commands": '),
    ],
)
def test_invalid_file_is_wrapped_as_config_error(
    tmp_path: Path, name: str, content: str
) -> None:
    p = write_text(tmp_path / name, content)
    with pytest.raises(ConfigError) as e:
        load_document(p)

    assert e.value.__cause__ is not None


@pytest.mark.parametrize(
    "ext, content",
    [
        (".yaml", "[]\n"),
        (".yaml", "null\n"),
        (".json", "[]"),
        (".json", "null"),
    ],
)
def test_top_level_not_mapping_raises(tmp_path: Path, ext: str, content: str) -> None:
    p = write_text(tmp_path / f"config{ext}", content)
    with pytest.raises(ConfigError):
        load_document(p)


def test_load_document_returns_raw_mapping(tmp_path: Path) -> None:
    p = write_text(tmp_path / "doc.yml", "a:\n  b: 1\nlist: [x, y]\n")
    assert load_document(p) == {"a": {"b": 1}, "list": ["x", "y"]}


# -------------------------
# Run config
# -------------------------


def test_minimal_yaml_uses_defaults(tmp_path: Path) -> None:
    p = write_text(tmp_path / "seqkit.yml", "commands:\n  - echo one\n  - ' echo two '\n")
    config = load_run_config(p)

    assert config == RunConfig(commands=["echo one", "echo two"])
    assert config.stop_on_error is True
    assert config.env == {}
    assert config.working_dir is None
    assert list(config) == ["echo one", "echo two"]
    assert len(config) == 2


def test_full_toml(tmp_path: Path) -> None:
    p = write_text(
        tmp_path / "seqkit.toml",
        'commands = ["make"]\n'
        "stop_on_error = false\n"
        'working_dir = " build "\n'
        "[env]\n"
        'MODE = "ci"\n',
    )
    config = load_run_config(p)

    assert config.commands == ["make"]
    assert config.stop_on_error is False
    assert config.working_dir == "build"
    assert config.env == {"MODE": "ci"}


def test_full_json(tmp_path: Path) -> None:
    p = write_json(
        tmp_path / "seqkit.json",
        {"commands": ["a", "b"], "env": {" K ": "v"}, "stop_on_error": True},
    )
    config = load_run_config(p)

    assert config.commands == ["a", "b"]
    assert config.env == {"K": "v"}


def test_missing_commands_key_raises(tmp_path: Path) -> None:
    p = write_text(tmp_path / "config.yaml", "stop_on_error: true\n")
    with pytest.raises(ConfigError):
        load_run_config(p)


def test_unknown_field_raises(tmp_path: Path) -> None:
    p = write_text(tmp_path / "config.yaml", "commands: [echo]\nnope: 1\n")
    with pytest.raises(ConfigError):
        load_run_config(p)


@pytest.mark.parametrize(
    "ext, content",
    [
        (".yaml", "commands: []\n"),
        (".yaml", "commands: null\n"),
        (".yaml", "commands: {a: b}\n"),
        (".json", '{"commands": "echo"}'),
        (".toml", "commands = 123\n"),
    ],
)
def test_commands_not_non_empty_list_raises(
    tmp_path: Path, ext: str, content: str
) -> None:
    p = write_text(tmp_path / f"config{ext}", content)
    with pytest.raises(ConfigError):
        load_run_config(p)


@pytest.mark.parametrize(
    "content",
    [
        "commands: [123]\n",
        "commands: ['   ']\n",
        "commands: [echo, null]\n",
    ],
)
def test_bad_command_entry_raises(tmp_path: Path, content: str) -> None:
    p = write_text(tmp_path / "config.yaml", content)
    with pytest.raises(ConfigError):
        load_run_config(p)


def test_stop_on_error_must_be_bool(tmp_path: Path) -> None:
    p = write_text(tmp_path / "config.yaml", "commands: [echo]\nstop_on_error: 'yes'\n")
    with pytest.raises(ConfigError):
        load_run_config(p)


@pytest.mark.parametrize(
    "env",
    [
        "env: []\n",
        "env: {1: a}\n",
        "env: {'  ': a}\n",
        "env: {A: 1}\n",
    ],
)
def test_bad_env_raises(tmp_path: Path, env: str) -> None:
    p = write_text(tmp_path / "config.yaml", "commands: [echo]\n" + env)
    with pytest.raises(ConfigError):
        load_run_config(p)


@pytest.mark.parametrize("working_dir", ["working_dir: 3\n", "working_dir: '  '\n"])
def test_bad_working_dir_raises(tmp_path: Path, working_dir: str) -> None:
    p = write_text(tmp_path / "config.yaml", "commands: [echo]\n" + working_dir)
    with pytest.raises(ConfigError):
        load_run_config(p)
