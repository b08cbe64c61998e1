"""Log sinks and CI outputs used by the backup runner."""
from __future__ import annotations

import logging
import os
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, TextIO

LOGGER = logging.getLogger(__name__)


@dataclass
class Reporter:
    """Collects step outputs and the run status, writing messages to the log."""

    logger: logging.Logger = LOGGER
    outputs: Dict[str, str] = field(default_factory=dict)
    failure: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        self.logger.info("Output %s=%s", name, value)

    def set_failed(self, message: str) -> None:
        self.failure = message


@dataclass
class ActionsReporter(Reporter):
    """Reporter for the GitHub Actions runner.

    Warnings and errors become workflow annotations and outputs are appended
    to the file named by ``GITHUB_OUTPUT``.
    """

    output_file: Optional[Path] = None
    stream: TextIO = field(default_factory=lambda: sys.stdout)

    @classmethod
    def from_env(cls, **kwargs) -> "ActionsReporter":
        output_file = os.environ.get("GITHUB_OUTPUT")
        return cls(output_file=Path(output_file) if output_file else None, **kwargs)

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def set_output(self, name: str, value: str) -> None:
        super().set_output(name, value)
        if self.output_file is None:
            return
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with self.output_file.open("a", encoding="utf-8") as fh:
            fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def set_failed(self, message: str) -> None:
        super().set_failed(message)
        self._command("error", message)

    def _command(self, command: str, message: str) -> None:
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        self.stream.write(f"::{command}::{escaped}\n")
        self.stream.flush()


__all__ = ["ActionsReporter", "Reporter"]
