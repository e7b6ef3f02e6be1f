"""StaticRepository: filters a fixed rule list loaded from configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from codeguide.core.context import RequestContext, ensure_context
from codeguide.repository.base import RuleRepository, matches_keywords, matches_language
from codeguide.rules.models import Rule


class StaticRepository(RuleRepository):
    """In-memory rule list, populated once and never mutated.

    Safe for concurrent readers without locking.
    """

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self._rules: tuple[Rule, ...] = tuple(rules)

    def __len__(self) -> int:
        return len(self._rules)

    def _snapshot(self) -> list[Rule]:
        return list(self._rules)

    def get_code_style(
        self,
        categories: Sequence[str],
        keywords: Sequence[str] = (),
        language: str | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Rule]:
        """Rules in any of ``categories`` (all when empty) that pass the keyword filter.

        Rules without keywords are general and always pass; otherwise one
        requested keyword must match a rule keyword, ignoring case.
        """
        ensure_context(ctx).raise_if_cancelled()
        wanted = set(categories)
        rules = [
            r
            for r in self._rules
            if (not wanted or r.category in wanted)
            and matches_keywords(r, keywords)
            and matches_language(r, language)
        ]
        self._logger.debug(
            "Code style lookup: categories=%s keywords=%s matched=%d",
            sorted(wanted),
            list(keywords),
            len(rules),
        )
        return rules
