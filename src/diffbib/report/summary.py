"""Diff report model and renderings.

A report pairs a :class:`DiffResult` with the sizes of the two input
collections. It renders as plain text for the console or as a JSON-ready
dictionary (see ``schemas/diff_report.schema.json``).
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from diffbib.matching.models import DiffResult

__all__ = ["DiffReport", "SEPARATOR", "REPORT_VERSION", "write_report_json"]

REPORT_VERSION = "1.0.0"

SEPARATOR = "-" * 31

_BUCKET_TITLES = (
    ("common", "Common keys"),
    ("only_origin", "Only in the origin file"),
    ("only_destiny", "Only in the destiny file"),
)


@dataclass(frozen=True)
class DiffReport:
    """Result of one comparison ready for presentation.

    Attributes
    ----------
    result : DiffResult
        Three-bucket result.
    origin_entries : int
        Number of records in the origin collection.
    destiny_entries : int
        Number of records in the destiny collection.
    origin : dict[str, Any] | None
        Origin source description (path, sha256, records, errors), if loaded
        from file.
    destiny : dict[str, Any] | None
        Destiny source description, if loaded from file.
    threshold : float | None
        Similarity threshold, for the bruteforce strategy only.
    """

    result: DiffResult
    origin_entries: int
    destiny_entries: int
    origin: dict[str, Any] | None = None
    destiny: dict[str, Any] | None = None
    threshold: float | None = None

    def skipped_errors(self) -> dict[str, list[str]]:
        """Return reader errors skipped by a lenient load, per side.

        Only sides with at least one error are listed. A non-empty result
        means the comparison ran on incomplete collections.
        """
        skipped: dict[str, list[str]] = {}
        for side, source in (("origin", self.origin), ("destiny", self.destiny)):
            if source and source.get("errors"):
                skipped[side] = list(source["errors"])
        return skipped

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary of counts and key lists."""
        data: dict[str, Any] = {
            "report_version": REPORT_VERSION,
            "strategy": self.result.strategy,
            "fields": list(self.result.fields),
            "threshold": self.threshold,
            "origin_entries": self.origin_entries,
            "destiny_entries": self.destiny_entries,
            "partial": bool(self.skipped_errors()),
            "sources": {"origin": self.origin, "destiny": self.destiny},
        }
        for name, _ in _BUCKET_TITLES:
            keys = self.result.keys(name)
            data[name] = {"count": len(keys), "keys": keys}
        return data

    def render_text(self) -> str:
        """Render the report as console text.

        Returns
        -------
        str
            Entry counts, a warning per partially read file, then one
            section per bucket. Key listings are omitted for empty buckets.
        """
        lines = [
            f"Origin entries: {self.origin_entries}, Destiny entries: {self.destiny_entries}"
        ]
        for side, errors in self.skipped_errors().items():
            lines.append(
                f"Warning: {side} file was read partially, {len(errors)} error(s) skipped"
            )
            lines.extend(f"  {error}" for error in errors)
        for name, title in _BUCKET_TITLES:
            keys = self.result.keys(name)
            lines.append(SEPARATOR)
            lines.append(f"{title}: {len(keys)}")
            if keys:
                lines.append(f"Keys: {', '.join(keys)}")
        return "\n".join(lines)


def write_report_json(report: DiffReport, path: str | Path) -> None:
    """Write *report* to *path* as indented, key-sorted JSON."""
    file_path = Path(path)
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False, sort_keys=True)
        f.write("\n")
