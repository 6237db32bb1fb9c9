"""Entry point for running jirabranch as a module.

This allows running the application with:
    python -m jirabranch [OPTIONS] [TICKET]
"""

from jirabranch.cli import app

if __name__ == "__main__":
    app()
