"""Subcommands of the psk command line."""
