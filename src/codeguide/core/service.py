"""RuleService: the synchronous entry point used by every transport."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from codeguide.core.context import RequestContext
from codeguide.rules.formatter import format_markdown, format_rules
from codeguide.rules.models import Example, Rule, ValidationResult

if TYPE_CHECKING:
    from codeguide.repository.base import RuleRepository

logger = logging.getLogger(__name__)


class RuleService:
    """Pass-through to the configured repository.

    All filtering lives behind the repository so static and vector backends
    stay interchangeable; the service only adds request parsing and
    formatting helpers.
    """

    def __init__(self, repository: RuleRepository) -> None:
        self._repository = repository

    @property
    def repository(self) -> RuleRepository:
        return self._repository

    def get_code_style(
        self,
        categories: Sequence[str],
        keywords: Sequence[str] = (),
        language: str | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Rule]:
        return self._repository.get_code_style(categories, keywords, language, ctx=ctx)

    def codestyle(
        self,
        categories: str,
        *,
        language: str | None = None,
        keywords: str = "",
        markdown: bool = False,
        ctx: RequestContext | None = None,
    ) -> str:
        """Comma-separated request in, formatted rules out ("" when nothing matches).

        The default is the compact LLM text; ``markdown=True`` renders a document.
        """
        rules = self.get_code_style(
            split_csv(categories), split_csv(keywords), language or None, ctx=ctx
        )
        logger.debug("codestyle matched %d rules", len(rules))
        if markdown:
            return format_markdown(rules) if rules else ""
        return format_rules(rules)

    def all_rules(self, *, ctx: RequestContext | None = None) -> list[Rule]:
        return self._repository.all_rules(ctx=ctx)

    def get_rules_by_category(
        self, category: str, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        return self._repository.get_rules_by_category(category, ctx=ctx)

    def get_rules_by_type(self, rule_type: str, *, ctx: RequestContext | None = None) -> list[Rule]:
        return self._repository.get_rules_by_type(rule_type, ctx=ctx)

    def get_applicable_rules(
        self, context: str, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        return self._repository.get_applicable_rules(context, ctx=ctx)

    def get_template(self, rule_name: str, *, ctx: RequestContext | None = None) -> str:
        return self._repository.get_template(rule_name, ctx=ctx)

    def get_examples(
        self, rule_name: str, *, ctx: RequestContext | None = None
    ) -> list[Example]:
        return self._repository.get_examples(rule_name, ctx=ctx)

    def validate_code(
        self, code: str, context: str, *, ctx: RequestContext | None = None
    ) -> ValidationResult:
        return self._repository.validate_code(code, context, ctx=ctx)

    def search_similar(
        self, query: str, limit: int = 5, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        return self._repository.search_similar(query, limit, ctx=ctx)


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated string, trimming items and dropping empty ones."""
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]
