"""Shared test fixtures for the knowledge graph test suite."""

import shutil
from datetime import datetime, timezone
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixed_now():
    """Reference clock for recency windows and review ages."""
    return datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def sample_corpus(tmp_path):
    """Copy of the fixture corpus, safe to write artifacts into.

    Documents: README.md, algorithms/searching.md, algorithms/sorting.md,
    databases/sql.md, languages/python.md. History marks searching.md and
    python.md as studied.
    """
    corpus = tmp_path / "corpus"
    shutil.copytree(FIXTURES_DIR / "corpus", corpus)
    return corpus


@pytest.fixture
def corpus_dir(tmp_path):
    """Empty corpus directory."""
    corpus = tmp_path / "notes"
    corpus.mkdir()
    return corpus


@pytest.fixture
def write_doc(corpus_dir):
    """Write a markdown file into corpus_dir and return its path."""
    def _write(relative_path, content):
        path = corpus_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_node():
    """Build a document node dict without touching the filesystem."""
    def _make(doc_id, topic="algorithms", links=None, keywords=None,
              difficulty=1, word_count=100, title=None):
        return {
            "id": doc_id,
            "title": title or Path(doc_id).stem,
            "filePath": doc_id,
            "topic": topic,
            "links": links or [],
            "backlinks": [],
            "keywords": keywords or [],
            "concepts": [],
            "difficulty": difficulty,
            "wordCount": word_count,
        }
    return _make
