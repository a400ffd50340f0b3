"""Built-in source pattern rules and tree-walk settings."""

from __future__ import annotations

import re

from jaudit.model import SastRule

DEFAULT_SOURCE_SUFFIXES: tuple[str, ...] = (".java",)
HIDDEN_ENTRY_PREFIX: str = "."

# Lines starting with these (after trimming) are treated as comments and skipped.
COMMENT_LINE_PREFIXES: tuple[str, ...] = ("//", "*")

SEVERITY_RANK: dict[str, int] = {
    "low": 1,
    "medium": 2,
    "high": 3,
    "critical": 4,
}

DEFAULT_SAST_RULES: tuple[SastRule, ...] = (
    SastRule(
        id="HARDCODED_SECRET",
        title="Did you mean to hardcode this secret?",
        pattern=re.compile(r"(?i)(api_key|secret|password|passwd|token)\s*=\s*['\"][a-zA-Z0-9_\-]{8,}['\"]"),
        description="Possible hardcoded secret detected. Use environment variables instead.",
        severity="high",
    ),
    SastRule(
        id="SQL_INJECTION",
        title="SQL Injection Risk",
        pattern=re.compile(r"(executeQuery|executeUpdate)\s*\(\s*\".*\"\s*\+"),
        description="Potential SQL Injection via string concatenation. Use PreparedStatement.",
        severity="high",
    ),
    SastRule(
        id="COMMAND_INJECTION",
        title="Command Injection Risk",
        pattern=re.compile(r"Runtime\.getRuntime\(\)\.exec\(\s*[^\"]"),
        description="Potential Command Injection with dynamic arguments. Validate input carefully.",
        severity="high",
    ),
    SastRule(
        id="WEAK_HASH",
        title="Weak Cryptography (MD5/SHA-1)",
        pattern=re.compile(r"MessageDigest\.getInstance\(\s*\"(MD5|SHA-1)\"\s*\)"),
        description="Weak hashing algorithm detected. Use SHA-256 or stronger.",
        severity="medium",
    ),
    SastRule(
        id="CLOUD_CREDENTIAL",
        title="Cloud Credential Leaked",
        pattern=re.compile(r"(AWS_ACCESS_KEY_ID|AWS_SECRET_ACCESS_KEY|GOOGLE_API_KEY)"),
        description="Potential cloud provider credential token found.",
        severity="critical",
    ),
)
