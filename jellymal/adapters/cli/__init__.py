"""Adaptateur CLI : commandes typer et interactions rich."""
