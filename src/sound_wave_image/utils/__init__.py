"""Shared helpers for audio decoding and logging."""
