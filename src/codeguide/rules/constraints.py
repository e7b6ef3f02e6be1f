"""Constraint checks applied to code snippets."""

from __future__ import annotations

import re

from codeguide.rules.models import (
    ForbiddenConstraint,
    MaxConstraint,
    MinConstraint,
    RegexConstraint,
)


def validate_constraint(code: str, constraint: object) -> bool:
    """Return True if ``code`` satisfies ``constraint``.

    Length is counted in characters. Invalid regular expressions and
    unrecognised constraint kinds fail closed (return False).
    """
    if isinstance(constraint, MaxConstraint):
        return len(code) <= constraint.value
    if isinstance(constraint, MinConstraint):
        return len(code) >= constraint.value
    if isinstance(constraint, RegexConstraint):
        return _search(constraint.value, code) is True
    if isinstance(constraint, ForbiddenConstraint):
        for pattern in constraint.value:
            matched = _search(pattern, code)
            if matched is None or matched:
                return False
        return True
    return False


def _search(pattern: str, code: str) -> bool | None:
    """re.search as a bool, or None when the pattern does not compile."""
    try:
        return re.search(pattern, code) is not None
    except re.error:
        return None
