"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from diffbib.audit.helpers import generate_run_id, get_package_version
from diffbib.audit.models import LogEvent
from diffbib.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current stage name for context.
    """

    def __init__(self, log_path: Path, run_id: str | None = None) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        log_path : Path
            Path to JSONL log file. Parent directories are created.
        run_id : str | None, optional
            Unique run identifier, generated if None.
        """
        self.run_id = run_id or generate_run_id()
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current stage context."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        side: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "stage_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier, uses current_stage if not provided.
        side : str | None, optional
            Comparison side if the event concerns one input.
        """
        if data is None:
            data = {}

        if stage is None:
            stage = self.current_stage

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data,
            stage=stage,
            side=side,
        )

        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        event_dict = asdict(event)
        json.dump(event_dict, self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log run_started event."""
        self.event(
            "run_started",
            data={
                "command": command,
                "parameters": parameters,
                "version": get_package_version(),
            },
        )

    def run_finished(self, status: str, duration_seconds: float) -> None:
        """Log run_finished event.

        Parameters
        ----------
        status : str
            Run status ("success" or "failed").
        duration_seconds : float
            Total execution time in seconds.
        """
        self.event(
            "run_finished",
            data={"status": status, "duration_seconds": duration_seconds},
        )

    def source_loaded(
        self,
        side: str,
        path: str,
        records: int,
        sha256: str,
        warnings: int = 0,
        errors: int = 0,
    ) -> None:
        """Log source_loaded event.

        Parameters
        ----------
        side : str
            "origin" or "destiny".
        path : str
            Path of the loaded file.
        records : int
            Number of records read.
        sha256 : str
            File digest.
        warnings : int, optional
            Number of reader warnings, by default 0.
        errors : int, optional
            Reader errors skipped by a lenient load, by default 0. A
            non-zero count raises the level to WARN.
        """
        self.event(
            "source_loaded",
            data={
                "path": path,
                "records": records,
                "sha256": sha256,
                "warnings": warnings,
                "errors": errors,
            },
            level="WARN" if errors else "INFO",
            side=side,
        )

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Log stage_started event and make *stage* the current stage."""
        self.set_stage(stage)

        data: dict[str, Any] = {}
        if expected_records is not None:
            data["expected_records"] = expected_records

        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log stage_finished event.

        Parameters
        ----------
        stage : str
            Stage identifier.
        duration_seconds : float
            Stage execution time in seconds.
        counters : dict[str, int] | None, optional
            Stage-specific counters.
        """
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters

        self.event("stage_finished", data=data, stage=stage)

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        side: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where error occurred.
        side : str | None, optional
            Failing side for load errors.
        reason : str | None, optional
            Load failure reason ("not_found", "unreadable", "malformed").
        """
        data: dict[str, Any] = {
            "exception_class": exception_class,
            "message": message,
        }
        if reason is not None:
            data["reason"] = reason

        self.event("error", data=data, stage=stage, side=side, level="ERROR")
