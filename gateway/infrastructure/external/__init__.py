"""External service adapters (object storage, upload relay)."""
