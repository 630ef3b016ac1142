"""Shared text and URL helpers."""
