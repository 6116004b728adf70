"""Shared helpers for kvlock."""
