"""
voidzone CLI
============

Command-line front end for one-off void queries.

Usage:
    voidzone-detect zones.yaml --x 640 --y 400
    voidzone-detect zones.yaml --x 640 --y 400 --preview void.png
"""

from .cli import main, load_zones

__all__ = ['main', 'load_zones']
