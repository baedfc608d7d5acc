"""Shared test fixtures and canned responses."""
