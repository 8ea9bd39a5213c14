"""Gym review directory: gyms, users, reviews and favorites over a dual-mode store."""

__all__: list[str] = []
