"""Command-line interface module for simple-xml."""

from .main import main

__all__ = ["main"]
