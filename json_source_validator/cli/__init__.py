"""Command line interface for validating JSON files."""

from .run_validate import main

__all__ = ['main']
