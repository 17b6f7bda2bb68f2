"""Command-line maintenance tools for the PantryFinder database."""
