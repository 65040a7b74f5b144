"""Configuration management package.

This package provides functionality for loading and managing growth configuration.
Values live in YAML files and are accessed through dot-notation paths.
"""

from roadgrowth.config.config_loader import Config

__all__ = ['Config']
