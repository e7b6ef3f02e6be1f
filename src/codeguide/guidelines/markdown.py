"""Markdown rendering for provider guidelines."""

from __future__ import annotations

from collections.abc import Iterable

from codeguide.guidelines.models import Guideline


def format_guidelines_markdown(guidelines: Iterable[Guideline], *, language: str = "") -> str:
    lines: list[str] = ["# Code Guidelines", ""]
    for g in guidelines:
        lines.extend([f"## {g.category}", ""])
        for rule in g.rules:
            lines.append(f"### {rule.title}")
            lines.extend([f"Priority: {rule.priority}", ""])
            lines.extend([rule.description, ""])
        if g.examples:
            lines.extend(["### Examples", ""])
            for example in g.examples:
                lines.extend([f"```{language}", example.rstrip("\n"), "```", ""])
        if g.references:
            lines.extend(["### References", ""])
            lines.extend(f"- {ref}" for ref in g.references)
            lines.append("")
    return "\n".join(lines)
