"""FastAPI server for the grounded search service."""
