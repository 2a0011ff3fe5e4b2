"""JSON file sink for exporting datasets and analysis results."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pricing_warehouse.exceptions import SinkError
from pricing_warehouse.sinks.serialization import dataset_to_dict, to_dict
from pricing_warehouse.store.portfolio import PortfolioStore

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output data to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_document(self, name: str, document: Any) -> Path:
        """Write a single document (e.g. an analysis result) to ``<name>.json``."""
        path = self._dump(f"{name}.json", to_dict(document))
        self._counts[name] = 1
        return path

    def write_dataset(self, store: PortfolioStore, name: str = "portfolio") -> Path:
        """Write a store as one dataset document readable by the loader."""
        path = self._dump(f"{name}.json", dataset_to_dict(store))
        for entity_type, count in store.summary().items():
            self._counts[f"{name}.{entity_type}"] = count
        return path

    def close(self) -> None:
        """Log a summary of written records."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, count in self._counts.items():
            logger.info("  %s: %d records", entity_type, count)

    def _dump(self, filename: str, data: Any) -> Path:
        file_path = self.output_dir / filename
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise SinkError(f"Failed to write {file_path}: {e}") from e
        return file_path
