"""Command-line entry points for cachedemo."""
