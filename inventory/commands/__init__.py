"""Command implementations for the inventory CLI."""
