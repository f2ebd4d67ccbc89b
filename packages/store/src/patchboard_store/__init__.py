"""Snapshot persistence for fetched change batches."""
