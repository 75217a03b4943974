"""Conversation session storage."""
