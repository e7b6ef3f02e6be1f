"""Repository settings and rule-list parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import TypeAdapter, ValidationError

from codeguide.core.errors import ConfigError
from codeguide.repository.embedding import DEFAULT_DIMENSIONS
from codeguide.rules.models import Rule


class RepositoryType(StrEnum):
    STATIC = "static"
    VECTOR = "vector"


@dataclass
class RepositoryConfig:
    type: str = RepositoryType.STATIC
    dimensions: int = DEFAULT_DIMENSIONS
    rules: list[Rule] = field(default_factory=list)


_RULES_ADAPTER = TypeAdapter(list[Rule])


def parse_rules(data: object) -> list[Rule]:
    """Validate raw configuration data into Rule models."""
    if data is None:
        return []
    try:
        return _RULES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ConfigError(f"invalid rules configuration: {e}") from e


def dump_rules(rules: list[Rule]) -> list[dict]:
    """Inverse of parse_rules, for writing configuration files."""
    return _RULES_ADAPTER.dump_python(rules, mode="json")
