"""Subcommands of the patchboard CLI."""
