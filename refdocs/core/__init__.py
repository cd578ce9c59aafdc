"""Shared infrastructure: paths, logging, exceptions and CLI helpers."""
