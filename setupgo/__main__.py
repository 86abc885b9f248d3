"""
Entry point for running setup-go as a module.

Usage: python -m setupgo [options]
"""

from setupgo.cli.parser import main

if __name__ == "__main__":
    main()
