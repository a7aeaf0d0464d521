"""Diff reporting: text and JSON renderings of a comparison."""

from diffbib.report.summary import REPORT_VERSION, SEPARATOR, DiffReport, write_report_json

__all__ = [
    "DiffReport",
    "REPORT_VERSION",
    "SEPARATOR",
    "write_report_json",
]
