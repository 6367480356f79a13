"""
Command-line interface (typer).
"""
