"""Common decorators for CLI commands."""

from __future__ import annotations

import functools
import time
from typing import Any, Callable

from ..utils import display_info, display_warning


def timing(func: Callable) -> Callable:
    """Decorator to measure execution time and report it on stderr."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            elapsed = time.time() - start_time
            display_info(f"Command completed in {elapsed:.2f} seconds", err=True)
            return result
        except Exception:
            elapsed = time.time() - start_time
            display_warning(f"Command failed after {elapsed:.2f} seconds", err=True)
            raise

    return wrapper


def log_command_execution(func: Callable) -> Callable:
    """Decorator to log command start and completion."""

    @functools.wraps(func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        self.logger.info("Executing command", command=self.__class__.__name__)
        result = func(self, *args, **kwargs)
        self.logger.info("Command completed", command=self.__class__.__name__)
        return result

    return wrapper
