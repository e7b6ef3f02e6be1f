"""Rule repositories: static list and vector-similarity backends."""

from codeguide.repository.base import RuleRepository, matches_keywords, matches_language
from codeguide.repository.config import (
    RepositoryConfig,
    RepositoryType,
    dump_rules,
    parse_rules,
)
from codeguide.repository.embedding import (
    DEFAULT_DIMENSIONS,
    cosine_similarity,
    hash_embedding,
)
from codeguide.repository.factory import create_repository
from codeguide.repository.static import StaticRepository
from codeguide.repository.vector import VectorRepository

__all__ = [
    "DEFAULT_DIMENSIONS",
    "RepositoryConfig",
    "RepositoryType",
    "RuleRepository",
    "StaticRepository",
    "VectorRepository",
    "cosine_similarity",
    "create_repository",
    "dump_rules",
    "hash_embedding",
    "matches_keywords",
    "matches_language",
    "parse_rules",
]
