"""Conversation orchestration for grounded search."""
