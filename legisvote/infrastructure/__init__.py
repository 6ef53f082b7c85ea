"""Infrastructure adapters: in-memory stores, notification fan-out, observability."""
