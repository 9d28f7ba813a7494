"""Behaviors package.

Importing this package ensures all built-in sketches are registered.
"""
from .auto_load import register_all

register_all()
