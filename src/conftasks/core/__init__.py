"""Ports and board state shared by the CLI and the refresher."""
