"""Render rules as compact LLM-oriented text or as Markdown."""

from __future__ import annotations

from collections.abc import Iterable

from codeguide.rules.models import Example, Rule

RULE_SEPARATOR = "---"


def format_for_llm(rule: Rule, *, with_identity: bool = False) -> str:
    """Token-lean text for a single rule.

    Sections whose source field is empty are omitted, so a rule with no
    description, pattern, metadata or examples renders as "".
    """
    parts: list[str] = []

    if with_identity:
        if rule.name:
            parts.append(f"Rule: {rule.name}")
        if rule.category:
            parts.append(f"Category: {rule.category}")
        if rule.type:
            parts.append(f"Type: {rule.type}")

    if rule.description:
        parts.append(f"Description: {rule.description}")
    if rule.pattern.template:
        parts.append(f"Template:\n{_fence(rule.pattern.template, rule.pattern.format)}")
    if rule.pattern.replacements:
        pairs = ", ".join(f"{k}={v}" for k, v in rule.pattern.replacements.items())
        parts.append(f"Replacements: {pairs}")
    if rule.applies_to:
        parts.append(f"Applies to: {', '.join(rule.applies_to)}")
    if rule.priority:
        parts.append(f"Priority: {rule.priority}")
    if rule.required:
        parts.append("Required: yes")

    parts.extend(_format_example(ex) for ex in rule.examples if ex.code)

    return "\n".join(parts)


def format_rules(rules: Iterable[Rule], *, with_identity: bool = False) -> str:
    """Join formatted rules with a separator line. No rules gives ""."""
    blocks = [format_for_llm(r, with_identity=with_identity) for r in rules]
    return f"\n{RULE_SEPARATOR}\n".join(b for b in blocks if b)


def format_markdown(rules: Iterable[Rule], *, title: str = "Code Style Rules") -> str:
    lines: list[str] = [f"# {title}", ""]
    for rule in rules:
        lines.append(f"## {rule.name}")
        lines.append("")
        meta = [f"**Category:** {rule.category}"]
        if rule.type:
            meta.append(f"**Type:** {rule.type}")
        if rule.priority:
            meta.append(f"**Priority:** {rule.priority}")
        if rule.required:
            meta.append("**Required**")
        lines.append(" | ".join(meta))
        lines.append("")
        if rule.description:
            lines.extend([rule.description, ""])
        if rule.applies_to:
            lines.extend([f"Applies to: {', '.join(rule.applies_to)}", ""])
        if rule.pattern.template:
            lines.extend(["### Template", "", _fence(rule.pattern.template, rule.pattern.format), ""])
        if rule.constraints:
            lines.extend(["### Constraints", ""])
            for c in rule.constraints:
                lines.append(f"- `{c.type}`: {c.message or c.value}")
            lines.append("")
        examples = [ex for ex in rule.examples if ex.code]
        if examples:
            lines.extend(["### Examples", ""])
            for ex in examples:
                if ex.description:
                    lines.append(f"{ex.description}:")
                lines.extend([_fence(ex.code, rule.pattern.format), ""])
    return "\n".join(lines).rstrip() + "\n"


def _format_example(example: Example) -> str:
    header = f"Example ({example.description}):" if example.description else "Example:"
    return f"{header}\n{_fence(example.code)}"


def _fence(code: str, lang: str = "") -> str:
    body = code if code.endswith("\n") else code + "\n"
    return f"```{lang}\n{body}```"
