"""Subcommands of the fractal-explore CLI."""
