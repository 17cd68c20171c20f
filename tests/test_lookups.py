"""Tests for lookup table loading."""

import json

import pytest

from talentrank.lookups import LookupTables, load_lookup_tables


class TestLoadLookupTables:
    def test_bundled_tables_load(self, tables):
        assert "store manager" in tables.role_synonyms["warehouse manager"]
        assert "gurgaon" in tables.location_aliases["delhi"]
        assert "fleet manager" in tables.known_roles
        assert [level.level for level in tables.education_levels] == [
            "high school", "diploma", "bachelor", "master", "phd",
        ]

    def test_custom_file_is_lowercased(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(
            json.dumps(
                {
                    "role_synonyms": {"Dock Supervisor": ["Yard Supervisor"]},
                    "known_locations": ["Pune"],
                    "education_levels": [{"level": "Bachelor", "aliases": ["B.Tech"]}],
                }
            ),
            encoding="utf-8",
        )

        tables = load_lookup_tables(path)

        assert tables.role_synonyms == {"dock supervisor": ["yard supervisor"]}
        assert tables.known_locations == ["pune"]
        assert tables.education_levels[0].aliases == ["b.tech"]
        assert tables.skill_synonyms == {}


class TestEducationRank:
    def test_ranks_known_levels(self, tables):
        assert tables.education_rank("High School") == 0
        assert tables.education_rank("ITI Diploma") == 1
        assert tables.education_rank("MBA") == 3

    def test_highest_level_wins(self, tables):
        assert tables.education_rank("B.Tech and MBA") == 3

    def test_unknown_returns_none(self, tables):
        assert tables.education_rank("certificate course") is None

    @pytest.mark.parametrize("text", ["Graduate in Political Science", "Quality Facilities Course"])
    def test_aliases_match_whole_words(self, tables, text):
        assert tables.education_rank(text) is None

    def test_plural_alias(self, tables):
        assert tables.education_rank("Masters in Logistics") == 3

    def test_empty_tables(self):
        assert LookupTables().education_rank("mba") is None
