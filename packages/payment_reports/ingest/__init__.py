"""Input loading: folder scanning and per-format adapters."""
