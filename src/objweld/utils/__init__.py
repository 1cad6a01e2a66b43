"""Shared I/O helpers."""
