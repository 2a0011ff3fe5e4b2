"""Tests for output sinks."""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from pricing_warehouse.analysis import compute_analysis
from pricing_warehouse.exceptions import SinkError
from pricing_warehouse.loader import load_dataset
from pricing_warehouse.models import AnalysisResult, PolicyStatus
from pricing_warehouse.scenarios import PortfolioScenario
from pricing_warehouse.sinks import ConsoleSink, JsonFileSink
from pricing_warehouse.sinks.serialization import serialize_value, to_dict


class TestSerialization:
    """Tests for serialization helpers."""

    def test_serialize_value(self) -> None:
        assert serialize_value(Decimal("291")) == 291
        assert serialize_value(Decimal("291.5")) == 291.5
        assert serialize_value(PolicyStatus.LAPSED) == "Lapsed"
        assert serialize_value(date(2023, 1, 15)) == "2023-01-15"
        assert serialize_value([Decimal("1"), None]) == [1, None]

    def test_entity_to_dict(self, template_store) -> None:
        policy = to_dict(template_store.policies[1])

        assert policy == {
            "policy_id": 1,
            "policyholder_id": 1,
            "product_type": "Term Life",
            "issue_date": "2023-01-15",
            "sum_insured": 100000,
            "policy_status": "Active",
            "lapse_date": None,
        }

    def test_fallback(self) -> None:
        assert to_dict(42) == {"value": "42"}


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_dataset_round_trip(self, tmp_path: Path, portfolio_store, as_of: date) -> None:
        sink = JsonFileSink(tmp_path)
        path = sink.write_dataset(portfolio_store)

        assert path == tmp_path / "portfolio.json"
        reloaded = load_dataset(path)
        assert reloaded.summary() == portfolio_store.summary()
        assert compute_analysis(reloaded, as_of) == compute_analysis(portfolio_store, as_of)

    def test_generated_dataset_round_trip(self, tmp_path: Path, small_config, seed: int) -> None:
        scenario = PortfolioScenario(small_config, seed=seed)
        scenario.generate()
        sink = JsonFileSink(tmp_path)

        scenario.export([sink])

        reloaded = load_dataset(tmp_path / "portfolio.json")
        assert reloaded.total_premiums() == scenario.store.total_premiums()
        assert reloaded.total_claims() == scenario.store.total_claims()

    def test_write_document(self, tmp_path: Path, portfolio_store, as_of: date) -> None:
        result = compute_analysis(portfolio_store, as_of)
        path = JsonFileSink(tmp_path, pretty=True).write_document("analysis", result)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["overallLossRatio"] == 73.33
        assert AnalysisResult.from_dict(data) == result

    def test_creates_output_dir(self, tmp_path: Path) -> None:
        out = tmp_path / "nested" / "out"
        JsonFileSink(out)
        assert out.is_dir()

    def test_unserializable_document(self, tmp_path: Path) -> None:
        with pytest.raises(SinkError):
            JsonFileSink(tmp_path).write_document("bad", {"value": object()})

    def test_close_logs_counts(self, tmp_path: Path, template_store, caplog) -> None:
        sink = JsonFileSink(tmp_path)
        sink.write_dataset(template_store, name="sample")

        with caplog.at_level("INFO", logger="pricing_warehouse"):
            sink.close()

        assert "sample.policies: 1 records" in caplog.text


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_write_batch_truncates(self, capsys, portfolio_store) -> None:
        sink = ConsoleSink(pretty=False, max_records=2)
        sink.write_batch("premiums", portfolio_store.premiums)

        out = capsys.readouterr().out
        assert "Entity: premiums (5 records)" in out
        assert "... and 3 more records" in out

    def test_write_dataset(self, capsys, portfolio_store) -> None:
        sink = ConsoleSink(pretty=False)
        sink.write_dataset(portfolio_store)
        sink.close()

        out = capsys.readouterr().out
        headers = [line for line in out.splitlines() if line.startswith("Entity: ")]
        assert [h.split(" (")[0] for h in headers] == [
            "Entity: policyholders",
            "Entity: policies",
            "Entity: premiums",
            "Entity: claims",
        ]
        assert "Entity: premiums (5 records)" in out
        assert "claims: 4 records" in out

    def test_write_document_and_close(self, capsys, portfolio_store, as_of: date) -> None:
        sink = ConsoleSink()
        sink.write_document("analysis", compute_analysis(portfolio_store, as_of))
        sink.close()

        out = capsys.readouterr().out
        assert "Document: analysis" in out
        assert '"overallLossRatio": 73.33' in out
        assert "analysis: 1 records" in out
