"""Procedural road network generation."""
