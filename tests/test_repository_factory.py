"""Tests for repository configuration parsing and the backend factory."""

import pytest

from codeguide.core.errors import ConfigError, NotSupportedError
from codeguide.repository.config import RepositoryConfig, RepositoryType, dump_rules, parse_rules
from codeguide.repository.factory import create_repository
from codeguide.repository.static import StaticRepository
from codeguide.repository.vector import VectorRepository
from codeguide.rules.models import MaxConstraint, Rule


class TestParseRules:
    def test_none_gives_empty_list(self):
        assert parse_rules(None) == []

    def test_parses_rule_dicts(self):
        rules = parse_rules(
            [
                {
                    "name": "short",
                    "category": "code",
                    "constraints": [{"type": "max", "value": 10, "message": "too long"}],
                }
            ]
        )
        assert rules[0].name == "short"
        assert isinstance(rules[0].constraints[0], MaxConstraint)

    def test_invalid_rule_is_config_error(self):
        with pytest.raises(ConfigError, match="invalid rules configuration"):
            parse_rules([{"category": "code"}])

    def test_unknown_constraint_type_is_config_error(self):
        with pytest.raises(ConfigError):
            parse_rules([{"name": "r", "category": "c", "constraints": [{"type": "len"}]}])

    def test_not_a_list_is_config_error(self):
        with pytest.raises(ConfigError):
            parse_rules({"name": "r"})

    def test_round_trip(self, sample_rules: list[Rule]):
        assert parse_rules(dump_rules(sample_rules)) == sample_rules


class TestCreateRepository:
    def test_default_is_static(self, sample_rules: list[Rule]):
        repo = create_repository(RepositoryConfig(rules=sample_rules))
        assert isinstance(repo, StaticRepository)
        assert repo.all_rules() == sample_rules

    def test_empty_type_is_static(self):
        assert isinstance(create_repository(RepositoryConfig(type="")), StaticRepository)

    def test_vector_is_populated(self, sample_rules: list[Rule]):
        repo = create_repository(
            RepositoryConfig(type=RepositoryType.VECTOR, dimensions=32, rules=sample_rules)
        )
        assert isinstance(repo, VectorRepository)
        assert repo.dimensions == 32
        assert len(repo.all_rules()) == len(sample_rules)

    def test_vector_from_plain_string(self):
        assert isinstance(create_repository(RepositoryConfig(type="vector")), VectorRepository)

    def test_unknown_type(self):
        with pytest.raises(NotSupportedError, match="unknown repository type: graph"):
            create_repository(RepositoryConfig(type="graph"))
