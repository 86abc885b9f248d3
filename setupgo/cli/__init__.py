"""Command-line interface for setup-go."""

from .parser import CLI, main

__all__ = ["CLI", "main"]
