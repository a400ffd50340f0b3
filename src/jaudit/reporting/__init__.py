"""Report rendering and output writers."""

from .stdout import StdoutReporter, format_severity
from .writer import build_report_payload, write_json_report

__all__ = ["StdoutReporter", "build_report_payload", "format_severity", "write_json_report"]
