"""jaudit: dependency vulnerability and source pattern auditor for JVM projects."""

__version__ = "0.3.0"
