"""Test bootstrap: ensure the repository root is on sys.path.

This allows absolute imports like `modules.arena.gen` and `config.config_loader`
when the project is not installed.
"""
import os
import sys

PACKAGE_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PACKAGE_ROOT not in sys.path:
    sys.path.insert(0, PACKAGE_ROOT)
