"""RuleRepository: the lookup contract shared by the static and vector backends."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from codeguide.core.context import RequestContext, ensure_context
from codeguide.core.errors import NotFoundError, NotSupportedError
from codeguide.rules.constraints import validate_constraint
from codeguide.rules.models import Example, Rule, ValidationResult


class RuleRepository(ABC):
    """Read contract over an immutable rule set.

    Subclasses provide ``_snapshot()`` (every rule, in stable order) and
    ``get_code_style()``; the name/type/context lookups and code validation
    are shared. Every public lookup checks the request context on entry.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(type(self).__module__)

    @abstractmethod
    def _snapshot(self) -> list[Rule]: ...

    @abstractmethod
    def get_code_style(
        self,
        categories: Sequence[str],
        keywords: Sequence[str] = (),
        language: str | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Rule]: ...

    def all_rules(self, *, ctx: RequestContext | None = None) -> list[Rule]:
        ensure_context(ctx).raise_if_cancelled()
        return self._snapshot()

    def get_rules_by_category(
        self, category: str, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        ensure_context(ctx).raise_if_cancelled()
        return [r for r in self._snapshot() if r.category == category]

    def get_rules_by_type(self, rule_type: str, *, ctx: RequestContext | None = None) -> list[Rule]:
        ensure_context(ctx).raise_if_cancelled()
        return [r for r in self._snapshot() if r.type == rule_type]

    def get_applicable_rules(
        self, context: str, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        ensure_context(ctx).raise_if_cancelled()
        return [r for r in self._snapshot() if context in r.applies_to]

    def get_template(self, rule_name: str, *, ctx: RequestContext | None = None) -> str:
        ensure_context(ctx).raise_if_cancelled()
        rule = self._find(rule_name)
        if rule is None:
            raise NotFoundError(f"template not found for rule: {rule_name}")
        return rule.pattern.template

    def get_examples(
        self, rule_name: str, *, ctx: RequestContext | None = None
    ) -> list[Example]:
        ensure_context(ctx).raise_if_cancelled()
        rule = self._find(rule_name)
        if rule is None:
            raise NotFoundError(f"examples not found for rule: {rule_name}")
        return list(rule.examples)

    def validate_code(
        self, code: str, context: str, *, ctx: RequestContext | None = None
    ) -> ValidationResult:
        """Check ``code`` against every rule applicable to ``context``.

        A rule whose validation regex does not compile contributes a warning
        message but does not make the result invalid.
        """
        result = ValidationResult()
        for rule in self.get_applicable_rules(context, ctx=ctx):
            self._validate_rule(rule, code, result)
        return result

    def search_similar(
        self, query: str, limit: int, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        raise NotSupportedError(f"{type(self).__name__} does not support similarity search")

    def _find(self, rule_name: str) -> Rule | None:
        return next((r for r in self._snapshot() if r.name == rule_name), None)

    def _validate_rule(self, rule: Rule, code: str, result: ValidationResult) -> None:
        pattern = rule.pattern.validation
        if pattern:
            try:
                if re.search(pattern, code) is None:
                    result.fail(f"code does not match validation pattern of rule '{rule.name}'")
            except re.error as e:
                self._logger.warning("Invalid validation pattern in rule %s: %s", rule.name, e)
                result.warn(f"rule '{rule.name}' has an invalid validation pattern: {e}")

        for constraint in rule.constraints:
            if not validate_constraint(code, constraint):
                result.fail(
                    constraint.message
                    or f"rule '{rule.name}': {constraint.type} constraint not satisfied"
                )


def matches_keywords(rule: Rule, keywords: Iterable[str]) -> bool:
    """True if no keywords were requested, the rule is general, or any keyword matches."""
    wanted = {k.lower() for k in keywords}
    if not wanted or not rule.keywords:
        return True
    return any(k.lower() in wanted for k in rule.keywords)


def matches_language(rule: Rule, language: str | None) -> bool:
    if not language or not rule.language:
        return True
    return rule.language.lower() == language.lower()
