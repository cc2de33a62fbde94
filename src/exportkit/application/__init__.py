"""Application layer – export compilation engine."""
