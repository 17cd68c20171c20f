"""Shared pytest fixtures for all tests."""

import json
from unittest.mock import patch

import pytest

from talentrank.config import DEFAULT_LOOKUP_TABLES_PATH
from talentrank.lookups import load_lookup_tables
from tests.test_utils import make_candidate_pool


@pytest.fixture(autouse=True)
def no_groq_key():
    """Keep every test offline, whatever the developer's .env contains."""
    with (
        patch("talentrank.llm.client.GROQ_API_KEY", None),
        patch("talentrank.utils.GROQ_API_KEY", None),
    ):
        yield


@pytest.fixture
def tables():
    """Lookup tables bundled with the package."""
    return load_lookup_tables(DEFAULT_LOOKUP_TABLES_PATH)


@pytest.fixture
def pool():
    return make_candidate_pool()


@pytest.fixture
def candidates_file(tmp_path, pool):
    """Write the candidate pool as a camelCase JSON array."""
    path = tmp_path / "candidates.json"
    rows = [candidate.model_dump(mode="json", by_alias=True) for candidate in pool]
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path
