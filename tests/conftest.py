"""Shared fixtures for codeguide tests."""

import logging

import pytest

from codeguide.bootstrap import Services
from codeguide.core.service import RuleService
from codeguide.guidelines.go_provider import GoProvider
from codeguide.guidelines.repository_provider import RepositoryProvider
from codeguide.guidelines.service import GuidelineService
from codeguide.logs import APP_NAME
from codeguide.repository.static import StaticRepository
from codeguide.repository.vector import VectorRepository
from codeguide.rules.models import (
    Example,
    ForbiddenConstraint,
    MaxConstraint,
    Rule,
    RulePattern,
)


@pytest.fixture(autouse=True)
def reset_codeguide_logger():
    """init_logging() detaches the package logger from root; undo that between tests."""
    yield
    root = logging.getLogger(APP_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def sample_rules() -> list[Rule]:
    return [
        Rule(
            name="func_doc",
            category="documentation",
            type="pattern",
            description="Document every public function",
            pattern=RulePattern(
                template='def {name}():\n    """{summary}"""',
                replacements={"name": "snake_case"},
                validation='"""',
                format="python",
            ),
            applies_to=["function"],
            priority=5,
            language="python",
            examples=[Example(description="Simple", code='def f():\n    """Do it."""')],
        ),
        Rule(
            name="table_tests",
            category="testing",
            description="Table-driven tests",
            keywords=["go"],
            language="go",
            examples=[Example(description="Basic", code="tests := []struct{}{}")],
        ),
        Rule(
            name="pytest_style",
            category="testing",
            description="Plain pytest functions and fixtures",
            keywords=["python", "API"],
            language="python",
            priority=2,
        ),
        Rule(
            name="short_functions",
            category="code",
            type="constraint",
            description="Keep functions short",
            applies_to=["function"],
            required=True,
            priority=8,
            constraints=[
                MaxConstraint(value=50, message="function too long"),
                ForbiddenConstraint(value=[r"print\("], message="no print calls"),
            ],
        ),
        Rule(
            name="deterministic_tests",
            category="testing",
            description="Tests must not depend on wall-clock time",
        ),
    ]


@pytest.fixture
def static_repo(sample_rules: list[Rule]) -> StaticRepository:
    return StaticRepository(sample_rules)


@pytest.fixture
def vector_repo(sample_rules: list[Rule]) -> VectorRepository:
    repo = VectorRepository(dimensions=64)
    repo.initialize_from_config(sample_rules)
    return repo


@pytest.fixture
def services(static_repo: StaticRepository) -> Services:
    guidelines = GuidelineService()
    guidelines.register_provider("go", GoProvider())
    guidelines.register_provider(
        "python", RepositoryProvider(static_repo, "python", ["api", "cli"])
    )
    return Services(rules=RuleService(static_repo), guidelines=guidelines)


@pytest.fixture
def vector_services(vector_repo: VectorRepository) -> Services:
    guidelines = GuidelineService()
    guidelines.register_provider("go", GoProvider())
    return Services(rules=RuleService(vector_repo), guidelines=guidelines)
