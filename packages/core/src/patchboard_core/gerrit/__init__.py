"""Gerrit REST access."""
