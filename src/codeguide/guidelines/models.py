"""Pydantic models for the guideline-provider surface."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GuidelineRequest(BaseModel):
    language: str = ""
    project_type: str = ""
    options: dict[str, str] = Field(default_factory=dict)


class GuidelineRule(BaseModel):
    title: str
    description: str
    priority: int = 0


class Guideline(BaseModel):
    category: str
    rules: list[GuidelineRule] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)
