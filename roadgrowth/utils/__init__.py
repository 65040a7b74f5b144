"""Utility modules for geometry, scheduling, spatial indexing and logging."""
