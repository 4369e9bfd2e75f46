"""Catalog models, money helpers, repositories and notifications."""
