"""Pydantic models for rules, constraints, examples and validation results."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class RuleType(StrEnum):
    PATTERN = "pattern"
    CONSTRAINT = "constraint"
    TEMPLATE = "template"
    NAMING = "naming"


class ConstraintType(StrEnum):
    MAX = "max"
    MIN = "min"
    REGEX = "regex"
    FORBIDDEN = "forbidden"


class MaxConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["max"] = "max"
    value: int
    message: str = ""


class MinConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["min"] = "min"
    value: int
    message: str = ""


class RegexConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["regex"] = "regex"
    value: str
    message: str = ""


class ForbiddenConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["forbidden"] = "forbidden"
    value: list[str] = Field(default_factory=list)
    message: str = ""


# The value type is fixed by ``type`` when the configuration is parsed.
Constraint = Annotated[
    MaxConstraint | MinConstraint | RegexConstraint | ForbiddenConstraint,
    Field(discriminator="type"),
]


class RulePattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    template: str = ""
    replacements: dict[str, str] = Field(default_factory=dict)
    validation: str = ""  # regex the code must match
    format: str = ""  # target language of the template


class Example(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""
    code: str = ""
    context: str = ""
    keywords: list[str] = Field(default_factory=list)


class Rule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    type: str = ""
    description: str = ""
    pattern: RulePattern = Field(default_factory=RulePattern)
    constraints: list[Constraint] = Field(default_factory=list)
    examples: list[Example] = Field(default_factory=list)
    applies_to: list[str] = Field(default_factory=list)
    priority: int = 0
    required: bool = False
    keywords: list[str] = Field(default_factory=list)  # empty = general rule
    language: str = ""  # empty = any language

    @property
    def identity(self) -> str:
        return f"{self.category}_{self.name}"


class ValidationResult(BaseModel):
    valid: bool = True
    messages: list[str] = Field(default_factory=list)

    def fail(self, message: str) -> None:
        self.valid = False
        self.messages.append(message)

    def warn(self, message: str) -> None:
        self.messages.append(message)


class Document(BaseModel):
    """A rule stored in a vector collection together with its embedding."""

    id: str
    name: str
    category: str
    rule: Rule
    vector: list[float]
