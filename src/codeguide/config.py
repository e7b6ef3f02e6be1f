"""Configuration dataclasses, YAML/JSON file loading, and environment overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from codeguide.core.errors import ConfigError
from codeguide.repository.config import RepositoryConfig, parse_rules

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 41888
DEFAULT_LOG_LEVEL = "info"

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


@dataclass
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL
    file: str | None = None
    text: bool = False


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass
class CodeguideConfig:
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    # language -> project types served from the rule repository
    guidelines: dict[str, list[str]] = field(default_factory=dict)


def default_config_path() -> Path | None:
    env = os.environ.get("CODEGUIDE_CONFIG")
    return Path(env) if env else None


def load_config(path: Path | None = None) -> CodeguideConfig:
    """Load config from a YAML or JSON file with env var overrides.

    A missing file yields defaults. A file that cannot be read or parsed, or
    rules that do not validate, raise ConfigError.
    """
    config = CodeguideConfig()
    if path is None:
        path = default_config_path()

    if path and path.exists():
        data = _read(path)
        _apply_repository(config.repository, data)
        if isinstance(data.get("logging"), dict):
            _apply_logging(config.logging, data["logging"])
        if isinstance(data.get("server"), dict):
            _apply_server(config.server, data["server"])
        if isinstance(data.get("guidelines"), dict):
            config.guidelines = _parse_guidelines(data["guidelines"])

    # Env var overrides
    if repo_type := os.environ.get("CODEGUIDE_REPOSITORY_TYPE"):
        config.repository.type = repo_type
    if level := os.environ.get("CODEGUIDE_LOG_LEVEL"):
        config.logging.level = level
    if log_file := os.environ.get("CODEGUIDE_LOG_FILE"):
        config.logging.file = log_file
    if host := os.environ.get("CODEGUIDE_HOST"):
        config.server.host = host
    if port := os.environ.get("CODEGUIDE_PORT"):
        try:
            config.server.port = int(port)
        except ValueError as e:
            raise ConfigError(f"CODEGUIDE_PORT must be an integer, got {port!r}") from e

    return config


def _read(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to read config {path}: {e}") from e
    if not text.strip():
        return {}

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"failed to parse config {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a mapping at the top level")
    return data


def _apply_repository(cfg: RepositoryConfig, data: dict) -> None:
    section = data.get("repository", {})
    if not isinstance(section, dict):
        raise ConfigError("'repository' must be a mapping")
    if "type" in section and isinstance(section["type"], str):
        cfg.type = section["type"]
    if "dimensions" in section:
        if not isinstance(section["dimensions"], int) or section["dimensions"] < 1:
            raise ConfigError("'repository.dimensions' must be a positive integer")
        cfg.dimensions = section["dimensions"]
    # Rules may sit under repository or at the top level.
    raw_rules = section.get("rules", data.get("rules"))
    cfg.rules = parse_rules(raw_rules)


def _apply_logging(cfg: LoggingConfig, data: dict[str, object]) -> None:
    if "level" in data and isinstance(data["level"], str):
        cfg.level = data["level"]
    if "file" in data and (data["file"] is None or isinstance(data["file"], str)):
        cfg.file = data["file"]  # type: ignore[assignment]
    if "text" in data and isinstance(data["text"], bool):
        cfg.text = data["text"]


def _apply_server(cfg: ServerConfig, data: dict[str, object]) -> None:
    if "host" in data and isinstance(data["host"], str):
        cfg.host = data["host"]
    if "port" in data and isinstance(data["port"], int):
        cfg.port = data["port"]


def _parse_guidelines(data: dict) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for language, project_types in data.items():
        if not isinstance(project_types, list) or not all(
            isinstance(p, str) for p in project_types
        ):
            raise ConfigError(f"guidelines.{language} must be a list of project types")
        result[str(language)] = list(project_types)
    return result
