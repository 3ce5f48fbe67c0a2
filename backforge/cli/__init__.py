"""
BackForge CLI - inspect registered backends and their schemas.
"""

from .main import main

__all__ = ['main']
