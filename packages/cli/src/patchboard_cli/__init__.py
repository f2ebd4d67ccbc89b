"""Command-line interface and web dashboard for patchboard."""
