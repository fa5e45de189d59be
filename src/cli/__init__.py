"""CLI de fishpi-client (Typer + Rich)."""
