"""Small developer-facing helpers (debug timing hooks)."""
