"""Favorites engine for the Lifehacking tips catalog."""
