"""Promotion cart for campaign checkout."""
