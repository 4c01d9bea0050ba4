#!/usr/bin/env python3
"""
Output Formatting Module for tokenmsg CLI

Provides output formatting for CLI results as tables, JSON or YAML.
"""

import json
from typing import Any, List, Optional

import yaml

OUTPUT_FORMATS = ('table', 'json', 'yaml')


class OutputFormatter:
    """Output formatter for CLI results."""

    def __init__(self, format_type: str = 'table', key_width: int = 20):
        """
        Initialize output formatter.

        Args:
            format_type: Output format (table, json, yaml)
            key_width: Width of the key column in table output
        """
        if format_type not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {format_type}")
        self.format_type = format_type
        self.key_width = key_width

    def format(self, data: Any) -> str:
        """
        Format data according to the configured format type.

        Args:
            data: Data to format

        Returns:
            Formatted string output
        """
        if self.format_type == 'json':
            return self.format_json(data)
        elif self.format_type == 'yaml':
            return self.format_yaml(data)
        return self.format_table(data)

    def format_json(self, data: Any) -> str:
        """Format data as JSON."""
        return json.dumps(data, indent=2, default=str)

    def format_yaml(self, data: Any) -> str:
        """Format data as YAML."""
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip('\n')

    def format_table(self, data: Any) -> str:
        """Format data as a simple key/value or row table."""
        if isinstance(data, dict):
            return "\n".join(
                f"{key:{self.key_width}} {self._cell(value)}" for key, value in data.items()
            )
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return self._format_rows(data)
        if isinstance(data, list):
            return "\n".join(str(item) for item in data)
        return str(data)

    def _format_rows(self, rows: List[dict]) -> str:
        headers = list(rows[0].keys())
        lines = [
            " | ".join(f"{h:15}" for h in headers),
            "-" * (len(headers) * 17),
        ]
        for row in rows:
            lines.append(" | ".join(f"{self._cell(row.get(h, ''))[:15]:15}" for h in headers))
        return "\n".join(lines)

    @staticmethod
    def _cell(value: Optional[Any]) -> str:
        if value is None:
            return "-"
        if isinstance(value, list):
            return ", ".join(str(v) for v in value) if value else "-"
        return str(value)
