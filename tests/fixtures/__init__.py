"""Shared HTML fixtures."""
