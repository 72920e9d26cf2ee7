"""
Unit tests for serialization.py module.

Tests client document loading and versioned projection save/load.
"""

import json
import logging

import pytest

from wealthplan.config import ProjectionParameters
from wealthplan.exceptions import ConfigurationError
from wealthplan.projection import (
    ProjectionResult,
    compute_projection,
    simulate_wealth_curve,
    summarize_projection,
)
from wealthplan.serialization import (
    load_projection,
    load_repository,
    next_projection_version,
    projection_from_dict,
    projection_to_dict,
    repository_from_dict,
    save_projection,
)
from wealthplan.types import AssetClass, EventType, Frequency


def _result(client_id: str) -> ProjectionResult:
    params = ProjectionParameters(
        client_id=client_id, initial_wealth=1_000, start_year=2025,
        end_year=2026, include_events=False,
    )
    years = simulate_wealth_curve(params, max_years=10)
    return ProjectionResult(params, tuple(years), summarize_projection(1_000, years))


# ============================================================================
# CLIENT DOCUMENT TESTS
# ============================================================================

class TestRepositoryFromDict:

    def test_multi_client_document(self, client_document):
        repo = repository_from_dict(client_document)
        assert repo.client_ids() == ["c-1"]
        wallets = repo.get_wallets_for_client("c-1")
        assert [w.asset_class for w in wallets] == [
            AssetClass.STOCKS, AssetClass.BONDS, AssetClass.CASH
        ]
        assert all(w.client_id == "c-1" for w in wallets)
        [event] = repo.get_events_for_client("c-1")
        assert event.frequency is Frequency.MONTHLY
        assert event.end_date.year == 2026
        [goal] = repo.get_goals_for_client("c-1")
        assert goal.target_date.isoformat() == "2027-06-01"

    def test_single_client_document(self, client_document):
        repo = repository_from_dict(client_document["clients"][0])
        assert repo.get_client("c-1").age == 35

    def test_missing_field(self, client_document):
        del client_document["clients"][0]["wallets"][0]["current_value"]
        with pytest.raises(ConfigurationError, match="current_value"):
            repository_from_dict(client_document)

    def test_invalid_record(self, client_document):
        client_document["clients"][0]["wallets"][0]["asset_class"] = "GOLD_BARS"
        with pytest.raises(ConfigurationError, match="Invalid client document"):
            repository_from_dict(client_document)

    def test_invalid_date(self, client_document):
        client_document["clients"][0]["goals"][0]["target_date"] = "June 2027"
        with pytest.raises(ConfigurationError):
            repository_from_dict(client_document)

    def test_load_repository(self, tmp_path, client_document):
        path = tmp_path / "clients.json"
        path.write_text(json.dumps(client_document))
        repo = load_repository(path)
        assert len(repo.get_insurance_for_client("c-1")) == 1

    def test_load_repository_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_repository(path)


# ============================================================================
# PROJECTION RUN TESTS
# ============================================================================

class TestProjectionPersistence:

    def test_to_dict_layout(self, repository, base_params):
        result = compute_projection(repository, base_params)
        data = projection_to_dict(result, name="Base", version=3)
        assert data["client_id"] == "c-1"
        assert data["version"] == 3
        assert data["parameters"]["real_rate"] == 0.04
        assert len(data["projections"]) == 6
        assert data["projections"][1]["events"][1] == {
            "type": "EXPENSE", "value": 30_000.0, "description": "New car"
        }
        assert data["summary"]["total_withdrawals"] == 30_000
        json.dumps(data)

    def test_dict_round_trip(self, repository, base_params):
        result = compute_projection(repository, base_params)
        restored = projection_from_dict(projection_to_dict(result))
        assert restored == result
        assert restored.years[1].events[0].type is EventType.INCOME

    def test_schema_mismatch(self, repository, base_params):
        data = projection_to_dict(compute_projection(repository, base_params))
        data["schema_version"] = "9.9.9"
        with pytest.raises(ConfigurationError, match="schema version"):
            projection_from_dict(data)

    def test_malformed(self, repository, base_params):
        data = projection_to_dict(compute_projection(repository, base_params))
        del data["projections"][0]["growth"]
        with pytest.raises(ConfigurationError, match="Malformed"):
            projection_from_dict(data)

    def test_versions_increase_per_client(self, tmp_path, repository, base_params):
        result = compute_projection(repository, base_params)
        assert next_projection_version(tmp_path / "missing", "c-1") == 1

        first = save_projection(result, tmp_path, "Base")
        second = save_projection(result, tmp_path, "Optimistic", description="5% real")
        assert first.name == "c-1_v001.json"
        assert second.name == "c-1_v002.json"
        assert next_projection_version(tmp_path, "c-1") == 3
        assert next_projection_version(tmp_path, "c-2") == 1

        stored = json.loads(second.read_text())
        assert stored["name"] == "Optimistic"
        assert stored["description"] == "5% real"
        assert load_projection(second) == result

    def test_glob_characters_in_client_id(self, tmp_path):
        first = save_projection(_result("acct[1]"), tmp_path, "Base")
        second = save_projection(_result("acct[1]"), tmp_path, "Again")
        assert first.name == "acct[1]_v001.json"
        assert second.name == "acct[1]_v002.json"
        assert json.loads(first.read_text())["name"] == "Base"

    def test_prefix_sharing_clients_versioned_separately(self, tmp_path):
        save_projection(_result("a_v"), tmp_path, "Other client")
        save_projection(_result("a_v"), tmp_path, "Other client")
        assert next_projection_version(tmp_path, "a") == 1
        assert save_projection(_result("a"), tmp_path, "Base").name == "a_v001.json"
        assert next_projection_version(tmp_path, "a_v") == 3

    def test_corrupt_archive_file_skipped(self, tmp_path, caplog):
        (tmp_path / "c_v001.json").write_text("{")
        with caplog.at_level(logging.WARNING, logger="wealthplan.serialization"):
            assert next_projection_version(tmp_path, "c") == 1
            path = save_projection(_result("c"), tmp_path, "Base")
        assert "c_v001.json" in caplog.text
        # the unreadable file is left in place
        assert (tmp_path / "c_v001.json").read_text() == "{"
        assert path.name == "c_v002.json"
        assert load_projection(path).parameters.client_id == "c"
