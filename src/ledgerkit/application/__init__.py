"""Application layer – use-case level building blocks."""
