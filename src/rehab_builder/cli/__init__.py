"""Typer command-line host."""
