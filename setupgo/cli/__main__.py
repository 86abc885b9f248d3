"""
Entry point for running the setup-go CLI as a module.

Usage: python -m setupgo.cli [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
