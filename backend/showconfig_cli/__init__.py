"""Typer command line interface for the TMDB show configuration tools."""

from .app import app

__all__ = ["app"]
