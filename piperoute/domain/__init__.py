"""Domain layer: grid primitives, solutions, and tie-breaking."""
