"""Base classes and utilities for CLI commands."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Union

import click

from ...config.manager import ConfigManager
from ...errors import RolloutError
from ...logging import get_logger


class CLIError(Exception):
    """Base exception for CLI-related errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class BaseCommand(ABC):
    """Base class for CLI commands with common functionality."""

    def __init__(self, config_manager: ConfigManager) -> None:
        self.config_manager = config_manager
        self.logger = get_logger(self.__class__.__module__)

    @abstractmethod
    def execute(self, **kwargs: Any) -> None:
        """Execute the command with the given parameters."""

    def handle_error(self, error: Exception, ctx: click.Context) -> None:
        """Report a failure to the user and the hosting workflow, then exit."""
        from ..utils import report_failure

        if isinstance(error, CLIError):
            self.logger.error("CLI error", error=str(error), exit_code=error.exit_code)
            report_failure(str(error))
            ctx.exit(error.exit_code)
        elif isinstance(error, RolloutError):
            self.logger.error(
                "Rollout failed", error=error.message, error_code=error.error_code
            )
            report_failure(error.message)
            ctx.exit(1)
        else:
            self.logger.error("Unexpected error", error=str(error))
            report_failure(f"Unexpected error: {error}")
            ctx.exit(1)


class OutputFormatter:
    """Utility class for formatting command output."""

    @staticmethod
    def format_json(data: Union[Dict[str, Any], List[Any]], indent: int = 2) -> str:
        """Format data as JSON."""

        class DateTimeEncoder(json.JSONEncoder):
            def default(self, obj):
                if isinstance(obj, datetime):
                    return obj.isoformat()
                return super().default(obj)

        return json.dumps(data, indent=indent, cls=DateTimeEncoder)

    @staticmethod
    def format_table(
        headers: List[str],
        rows: List[List[str]],
        max_width: int = 100,
    ) -> str:
        """Format data as a table."""
        if not headers or not rows:
            return ""

        col_widths = [len(header) for header in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(col_widths):
                    col_widths[i] = max(col_widths[i], len(str(cell)))

        total_width = sum(col_widths) + (len(headers) - 1) * 3
        if total_width > max_width:
            scale = max_width / total_width
            col_widths = [max(1, int(width * scale)) for width in col_widths]

        lines = []
        separator = " | ".join("-" * width for width in col_widths)
        header_line = " | ".join(
            header.ljust(width) for header, width in zip(headers, col_widths)
        )

        lines.append(header_line)
        lines.append(separator)

        for row in rows:
            row_line = " | ".join(
                str(cell)[:width].ljust(width) for cell, width in zip(row, col_widths)
            )
            lines.append(row_line)

        return "\n".join(lines)
