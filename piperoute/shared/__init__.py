"""Cross-cutting configuration, exceptions, and utilities."""
