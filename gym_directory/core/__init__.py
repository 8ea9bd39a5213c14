"""Cross-cutting configuration, errors and startup."""
