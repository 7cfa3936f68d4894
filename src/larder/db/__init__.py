"""Larder - Database access."""
