"""Persistence adapters for the set store."""
