"""Grounded search provider clients."""
