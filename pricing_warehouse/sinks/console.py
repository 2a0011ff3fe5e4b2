"""Console sink for debugging and development."""

import json
from typing import Any

from pricing_warehouse.sinks.serialization import to_dict
from pricing_warehouse.store.portfolio import PortfolioStore


class ConsoleSink:
    """Output data to console (stdout) for debugging."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to console."""
        print(f"\n{'='*60}")
        print(f"Entity: {entity_type} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            print(self._dumps(to_dict(record)))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def write_dataset(self, store: PortfolioStore) -> None:
        """Write every collection of a store, one batch per entity type."""
        self.write_batch("policyholders", list(store.policyholders.values()))
        self.write_batch("policies", list(store.policies.values()))
        self.write_batch("premiums", store.premiums)
        self.write_batch("claims", store.claims)

    def write_document(self, name: str, document: Any) -> None:
        """Write a single document to console."""
        print(f"\n{'='*60}")
        print(f"Document: {name}")
        print("=" * 60)
        print(self._dumps(to_dict(document)))
        self._counts[name] = self._counts.get(name, 0) + 1

    def close(self) -> None:
        """Print summary."""
        print(f"\n{'='*60}")
        print("Summary:")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
        print("=" * 60)

    def _dumps(self, data: Any) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)
