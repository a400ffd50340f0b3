"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "JAUDIT"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ JAUDIT",
    "     // dependency and source audit for JVM projects",
)
AUDIT_SUMMARY_TITLE: str = "Audit summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} security auditor"))
