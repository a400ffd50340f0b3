"""Shared constant definitions."""
