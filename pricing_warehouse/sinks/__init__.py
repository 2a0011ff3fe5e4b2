"""Output sinks for exporting datasets and analysis results."""

from pricing_warehouse.sinks.console import ConsoleSink
from pricing_warehouse.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
