"""Core primitives: exceptions and answer value helpers."""
