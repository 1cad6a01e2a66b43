"""File-based pipeline steps."""
