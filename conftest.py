"""Keeps the project root importable so tests can use `from src...`."""
