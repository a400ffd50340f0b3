"""Command line interface for jaudit."""
