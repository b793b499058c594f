"""Typed operation options and results."""
