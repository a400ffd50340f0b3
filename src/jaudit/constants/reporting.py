"""Constants for report output and stdout formatting."""

from __future__ import annotations

REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

SCHEMA_VERSION: str = "1.0.0"

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

SEVERITY_COLORS: dict[str, str] = {
    "critical": ANSI_RED,
    "high": ANSI_RED,
    "medium": ANSI_YELLOW,
    "low": ANSI_DIM,
}

# Process exit codes chosen by the CLI.
EXIT_CLEAN: int = 0
EXIT_FINDINGS: int = 1
EXIT_CONFIG_ERROR: int = 2
EXIT_PHASE_FAILED: int = 3

SEVERITY_DISPLAY_ORDER: tuple[str, ...] = ("critical", "high", "medium", "low")
