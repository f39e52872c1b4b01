from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from dependency_injector.resources import Resource

from .handlers import build_human_console_handler, build_json_file_handler


class RunLogger(Resource):
    """Structured logger for sampling runs.

    Keyword fields passed to the log methods end up in the record's
    ``extra`` and therefore as keys of the JSONL entries.
    """

    def init(
        self,
        *,
        logs_dir: Path,
        json_file: Optional[str] = None,
        logger_name: str = "revo",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "RunLogger":
        """Configure handlers.

        Args:
            logs_dir: Directory for the JSONL file
            json_file: File name under ``logs_dir``; no file handler when None
            logger_name: Logger name
            console_output: Whether to add a human-readable console handler
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric = getattr(logging, level.upper(), logging.INFO)
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []

        if json_file:
            file_handler = build_json_file_handler(logs_dir / json_file, level=numeric)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "RunLogger") -> None:
        """Flush and close every handler this logger installed."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.debug(message, extra=fields or None)

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(message, extra=fields or None)

    def warning(self, message: str, **fields: Any) -> None:
        self._logger.warning(message, extra=fields or None)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._logger.error(message, extra=fields or None, exc_info=exc_info)

    def exception(self, message: str, **fields: Any) -> None:
        self._logger.exception(message, extra=fields or None)
