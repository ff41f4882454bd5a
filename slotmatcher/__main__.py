"""
Convenience entry point for running slotmatcher as a module.

Usage: python -m slotmatcher [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
