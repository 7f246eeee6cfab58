"""Utilities for I Ching module."""
