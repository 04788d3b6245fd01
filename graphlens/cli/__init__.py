"""Command implementations for the graphlens CLI."""
