"""PantryFinder backend: REST API for the community pantry map."""

__version__ = "1.0.0"
