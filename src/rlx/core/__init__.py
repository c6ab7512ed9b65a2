"""Core utilities shared across rlx modules."""
