"""Scaffold new workspace members from a template directory."""

__version__ = "0.1.0"
