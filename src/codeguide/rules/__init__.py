"""Rule models, constraint checks and formatting."""

from codeguide.rules.constraints import validate_constraint
from codeguide.rules.formatter import (
    RULE_SEPARATOR,
    format_for_llm,
    format_markdown,
    format_rules,
)
from codeguide.rules.models import (
    Constraint,
    ConstraintType,
    Document,
    Example,
    ForbiddenConstraint,
    MaxConstraint,
    MinConstraint,
    RegexConstraint,
    Rule,
    RulePattern,
    RuleType,
    ValidationResult,
)

__all__ = [
    "RULE_SEPARATOR",
    "Constraint",
    "ConstraintType",
    "Document",
    "Example",
    "ForbiddenConstraint",
    "MaxConstraint",
    "MinConstraint",
    "RegexConstraint",
    "Rule",
    "RulePattern",
    "RuleType",
    "ValidationResult",
    "format_for_llm",
    "format_markdown",
    "format_rules",
    "validate_constraint",
]
