"""Shared models and utilities for AI Mirror services."""
