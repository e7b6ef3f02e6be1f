"""Build the configured repository backend."""

from __future__ import annotations

import logging

from codeguide.core.errors import NotSupportedError
from codeguide.repository.base import RuleRepository
from codeguide.repository.config import RepositoryConfig, RepositoryType
from codeguide.repository.static import StaticRepository
from codeguide.repository.vector import VectorRepository

logger = logging.getLogger(__name__)


def create_repository(config: RepositoryConfig) -> RuleRepository:
    """Return a populated repository for ``config.type`` (empty type means static)."""
    repo_type = config.type or RepositoryType.STATIC
    if repo_type == RepositoryType.STATIC:
        repo: RuleRepository = StaticRepository(config.rules)
    elif repo_type == RepositoryType.VECTOR:
        vector = VectorRepository(dimensions=config.dimensions)
        vector.initialize_from_config(config.rules)
        repo = vector
    else:
        raise NotSupportedError(f"unknown repository type: {repo_type}")

    logger.info("Using %s repository with %d rules", repo_type, len(config.rules))
    return repo
