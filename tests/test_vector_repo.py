"""Tests for VectorRepository."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from codeguide.core.context import RequestContext
from codeguide.core.errors import (
    InternalError,
    InvalidRequestError,
    NotFoundError,
    RequestCancelledError,
)
from codeguide.repository.locks import ReadWriteLock
from codeguide.repository.vector import VectorRepository
from codeguide.rules.models import Rule


def _names(rules: list[Rule]) -> list[str]:
    return [r.name for r in rules]


class TestAddRule:
    def test_returns_document(self):
        repo = VectorRepository(dimensions=16)
        doc = repo.add_rule(Rule(name="r", category="code", description="D"))
        assert doc.id == "code_r"
        assert doc.category == "code"
        assert len(doc.vector) == 16

    def test_groups_by_category(self, vector_repo: VectorRepository):
        assert vector_repo.collection_sizes() == {"documentation": 1, "testing": 3, "code": 1}

    def test_empty_category_rejected(self):
        with pytest.raises(InvalidRequestError):
            VectorRepository(dimensions=4).add_rule(Rule(name="r", category=""))

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidRequestError):
            VectorRepository(dimensions=4).add_rule(Rule(name="", category="code"))

    def test_initialize_stops_at_first_error(self):
        repo = VectorRepository(dimensions=4)
        rules = [
            Rule(name="ok", category="code"),
            Rule(name="bad", category=""),
            Rule(name="never", category="code"),
        ]
        with pytest.raises(InvalidRequestError):
            repo.initialize_from_config(rules)
        assert repo.collection_sizes() == {"code": 1}

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(InvalidRequestError):
            VectorRepository(dimensions=0)

    def test_embedder_wrong_size_is_internal_error(self):
        repo = VectorRepository(dimensions=8, embedder=lambda text, dims: [1.0])
        with pytest.raises(InternalError, match="expected 8"):
            repo.add_rule(Rule(name="r", category="code"))

    def test_embedder_value_error_is_internal_error(self):
        def failing(text: str, dims: int) -> list[float]:
            raise ValueError("boom")

        repo = VectorRepository(dimensions=8, embedder=failing)
        with pytest.raises(InternalError, match="boom"):
            repo.add_rule(Rule(name="r", category="code"))


class TestGetCodeStyle:
    def test_union_in_requested_order(self, vector_repo: VectorRepository):
        rules = vector_repo.get_code_style(["code", "testing"])
        assert _names(rules) == [
            "short_functions",
            "table_tests",
            "pytest_style",
            "deterministic_tests",
        ]

    def test_duplicate_categories_counted_once(self, vector_repo: VectorRepository):
        assert len(vector_repo.get_code_style(["code", "code"])) == 1

    def test_empty_categories_returns_every_collection(self, vector_repo: VectorRepository):
        assert _names(vector_repo.get_code_style([])) == [
            "func_doc",
            "table_tests",
            "pytest_style",
            "deterministic_tests",
            "short_functions",
        ]

    def test_keywords_ignored(self, vector_repo: VectorRepository):
        assert len(vector_repo.get_code_style(["testing"], ["api"])) == 3

    def test_language_filter_applies(self, vector_repo: VectorRepository):
        rules = vector_repo.get_code_style(["testing"], (), "python")
        assert _names(rules) == ["pytest_style", "deterministic_tests"]

    def test_unknown_category(self, vector_repo: VectorRepository):
        assert vector_repo.get_code_style(["missing"]) == []


class TestLookups:
    def test_rules_by_category(self, vector_repo: VectorRepository):
        assert _names(vector_repo.get_rules_by_category("documentation")) == ["func_doc"]
        assert vector_repo.get_rules_by_category("missing") == []

    def test_shared_lookups_work(self, vector_repo: VectorRepository):
        assert _names(vector_repo.get_rules_by_type("constraint")) == ["short_functions"]
        assert vector_repo.get_template("func_doc").startswith("def {name}")
        with pytest.raises(NotFoundError):
            vector_repo.get_examples("missing")

    def test_validate_code(self, vector_repo: VectorRepository):
        result = vector_repo.validate_code('def f():\n    print("x")', "function")
        assert result.valid is False
        assert "no print calls" in result.messages


class TestSearchSimilar:
    def test_exact_text_ranks_first(self, vector_repo: VectorRepository):
        results = vector_repo.search_similar("short_functions Keep functions short", 1)
        assert _names(results) == ["short_functions"]

    def test_limit_truncates(self, vector_repo: VectorRepository):
        assert len(vector_repo.search_similar("tests", 2)) == 2

    def test_limit_larger_than_collection(self, vector_repo: VectorRepository):
        assert len(vector_repo.search_similar("tests", 50)) == 5

    def test_non_positive_limit_rejected(self, vector_repo: VectorRepository):
        with pytest.raises(InvalidRequestError):
            vector_repo.search_similar("tests", 0)

    def test_empty_repository(self):
        assert VectorRepository(dimensions=4).search_similar("anything", 3) == []

    def test_cancelled(self, vector_repo: VectorRepository):
        ctx = RequestContext()
        ctx.cancel()
        with pytest.raises(RequestCancelledError):
            vector_repo.search_similar("tests", 1, ctx=ctx)


class TestConcurrency:
    def test_reads_during_writes(self):
        repo = VectorRepository(dimensions=8)
        rules = [Rule(name=f"r{i}", category=f"c{i % 3}") for i in range(60)]

        def read(_: int) -> int:
            return len(repo.get_code_style([]))

        with ThreadPoolExecutor(max_workers=4) as pool:
            writer = pool.submit(repo.initialize_from_config, rules)
            counts = list(pool.map(read, range(40)))
            writer.result()

        assert all(0 <= c <= 60 for c in counts)
        assert sum(repo.collection_sizes().values()) == 60


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        with lock.read(), lock.read():
            pass

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def write() -> None:
            with lock.write():
                acquired.set()

        with lock.read():
            t = threading.Thread(target=write)
            t.start()
            assert not acquired.wait(0.05)
        t.join(timeout=1)
        assert acquired.is_set()
