"""Expense tracking backend: bearer-token sessions and AI-categorized expenses."""

from .app import create_app

__all__ = ["create_app"]
