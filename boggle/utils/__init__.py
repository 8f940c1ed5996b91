"""Display helpers."""
