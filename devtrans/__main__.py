"""
Entry point for running devtrans as a module.

Usage:
    python -m devtrans --help
    python -m devtrans translate --text 'const msg = "fetch user";'
    python -m devtrans validate
"""
from .cli import app


if __name__ == "__main__":
    app()
