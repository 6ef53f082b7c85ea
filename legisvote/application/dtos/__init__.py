"""Application-layer DTOs (read models)."""
