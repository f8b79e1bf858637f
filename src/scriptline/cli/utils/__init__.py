"""Shared helpers for Scriptline CLI commands."""
