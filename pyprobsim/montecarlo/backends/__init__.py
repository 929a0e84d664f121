"""Replication backends: sequential (cpu) and chunk-parallel (chunked)."""
