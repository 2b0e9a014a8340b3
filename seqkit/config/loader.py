import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import ConfigError, RunConfig, UnsupportedConfigFormatError


def load_document(path: str | Path) -> Mapping[str, Any]:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    return _parse_file(pure_path, fmt)


def load_run_config(path: str | Path) -> RunConfig:
    return _build_run_config(load_document(path))


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    return _expect_mapping(path, "YAML", raw_file)


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc

    return _expect_mapping(path, "TOML", raw_file)


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    return _expect_mapping(path, "JSON", raw_file)


def _expect_mapping(path: Path, fmt: str, raw_file: Any) -> Mapping[str, Any]:
    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: {fmt} parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_run_config(raw: Mapping[str, Any]) -> RunConfig:
    keys = {"commands", "stop_on_error", "env", "working_dir"}
    commands = []
    env = {}
    stop_on_error = True
    working_dir = None

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"Can't process: {field}")

    if "commands" not in raw:
        raise ConfigError("Missing 'commands' field")

    if not isinstance(raw["commands"], list):
        raise ConfigError(f"'commands' must be a list, got {type(raw['commands'])}")

    if len(raw["commands"]) < 1:
        raise ConfigError("There must be at least one command in the config file")

    for index, item in enumerate(raw["commands"]):
        if not isinstance(item, str):
            raise ConfigError(f"Command {index} should be a string, got {type(item)}")

        if len(item.strip()) < 1:
            raise ConfigError(f"Command {index} is empty")

        commands.append(item.strip())

    if "stop_on_error" in raw:
        if not isinstance(raw["stop_on_error"], bool):
            raise ConfigError("'stop_on_error' should be a boolean")

        stop_on_error = raw["stop_on_error"]

    if "env" in raw:
        if not isinstance(raw["env"], Mapping):
            raise ConfigError("Env should be a mapping")

        for key, item in raw["env"].items():
            if not isinstance(key, str):
                raise ConfigError(f"{key} should be a string")

            if len(key.strip()) < 1:
                raise ConfigError("A key can't be empty")

            if not isinstance(item, str):
                raise ConfigError(f"{item} should be a string")

            env[key.strip()] = item

    if "working_dir" in raw:
        if not isinstance(raw["working_dir"], str):
            raise ConfigError("The working_dir should be a string")

        if len(raw["working_dir"].strip()) < 1:
            raise ConfigError("Please provide a string or remove the working_dir field")

        working_dir = raw["working_dir"].strip()

    return RunConfig(commands, stop_on_error, env, working_dir)
