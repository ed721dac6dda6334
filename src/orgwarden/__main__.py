"""Entry point for running orgwarden as a module.

Usage:
    python -m orgwarden [command] [options]

Example:
    python -m orgwarden audit aliases.json > report.json
    python -m orgwarden graph --report report.json
"""

from orgwarden.cli import app

if __name__ == "__main__":
    app()
