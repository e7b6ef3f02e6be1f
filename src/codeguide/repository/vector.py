"""VectorRepository: per-category document collections with similarity search."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from codeguide.core.context import RequestContext, ensure_context
from codeguide.core.errors import InternalError, InvalidRequestError
from codeguide.repository.base import RuleRepository, matches_language
from codeguide.repository.embedding import (
    DEFAULT_DIMENSIONS,
    Embedder,
    cosine_similarity,
    hash_embedding,
)
from codeguide.repository.locks import ReadWriteLock
from codeguide.rules.models import Document, Rule


class VectorRepository(RuleRepository):
    """Rules grouped by category, each stored with an embedding vector.

    One reader/writer lock covers the whole collection map: lookups share it,
    ``add_rule`` takes it exclusively.
    """

    def __init__(
        self,
        *,
        dimensions: int = DEFAULT_DIMENSIONS,
        embedder: Embedder = hash_embedding,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(logger=logger)
        if dimensions < 1:
            raise InvalidRequestError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions
        self._embedder = embedder
        self._collections: dict[str, list[Document]] = {}
        self._lock = ReadWriteLock()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def add_rule(self, rule: Rule, *, ctx: RequestContext | None = None) -> Document:
        ensure_context(ctx).raise_if_cancelled()
        if not rule.category:
            raise InvalidRequestError(f"rule {rule.name!r} has no category")
        if not rule.name:
            raise InvalidRequestError("rule name must not be empty")

        vector = self._embed(f"{rule.name} {rule.description}")
        document = Document(
            id=rule.identity,
            name=rule.name,
            category=rule.category,
            rule=rule,
            vector=vector,
        )
        with self._lock.write():
            self._collections.setdefault(rule.category, []).append(document)
        self._logger.debug("Added rule %s to collection %s", rule.name, rule.category)
        return document

    def initialize_from_config(self, rules: Iterable[Rule]) -> None:
        """Add each rule in order; the first failure propagates and stops loading."""
        count = 0
        for rule in rules:
            self.add_rule(rule)
            count += 1
        self._logger.info(
            "Vector repository initialized: %d rules in %d collections",
            count,
            len(self._collections),
        )

    def collection_sizes(self) -> dict[str, int]:
        with self._lock.read():
            return {name: len(docs) for name, docs in self._collections.items()}

    def _snapshot(self) -> list[Rule]:
        with self._lock.read():
            return [doc.rule for docs in self._collections.values() for doc in docs]

    def get_code_style(
        self,
        categories: Sequence[str],
        keywords: Sequence[str] = (),
        language: str | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Rule]:
        """Union of the requested category collections; keywords are not filtered here."""
        ensure_context(ctx).raise_if_cancelled()
        if keywords:
            self._logger.debug("Vector repository ignores keyword filter: %s", list(keywords))
        with self._lock.read():
            if categories:
                docs = [
                    doc
                    for category in dict.fromkeys(categories)
                    for doc in self._collections.get(category, [])
                ]
            else:
                docs = [doc for docs in self._collections.values() for doc in docs]
        return [doc.rule for doc in docs if matches_language(doc.rule, language)]

    def get_rules_by_category(
        self, category: str, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        ensure_context(ctx).raise_if_cancelled()
        with self._lock.read():
            return [doc.rule for doc in self._collections.get(category, [])]

    def search_similar(
        self, query: str, limit: int, *, ctx: RequestContext | None = None
    ) -> list[Rule]:
        """Top ``limit`` rules by cosine similarity to ``query``.

        Equal scores keep insertion order; callers should not depend on it.
        """
        ensure_context(ctx).raise_if_cancelled()
        if limit < 1:
            raise InvalidRequestError(f"limit must be positive, got {limit}")
        query_vector = self._embed(query)
        with self._lock.read():
            docs = [doc for docs in self._collections.values() for doc in docs]
        scored = sorted(
            ((cosine_similarity(query_vector, doc.vector), doc) for doc in docs),
            key=lambda pair: pair[0],
            reverse=True,
        )
        return [doc.rule for _, doc in scored[:limit]]

    def _embed(self, text: str) -> list[float]:
        try:
            vector = self._embedder(text, self._dimensions)
        except ValueError as e:
            raise InternalError(f"embedding failed: {e}") from e
        if len(vector) != self._dimensions:
            raise InternalError(
                f"embedding has {len(vector)} dimensions, expected {self._dimensions}"
            )
        return vector
