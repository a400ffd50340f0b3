"""Helper stages used by the dependency audit orchestrator."""
