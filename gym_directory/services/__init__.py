"""Use cases on top of the store plus the backend-agnostic query engine."""
