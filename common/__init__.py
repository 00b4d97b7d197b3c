"""Shared settings and configuration helpers."""
