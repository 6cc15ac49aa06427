"""Command-line interface for CraftLens."""
