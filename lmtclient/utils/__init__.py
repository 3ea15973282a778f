"""
Utils module for lmt-client
===========================
"""

from .config import ClientSettings

__all__ = ['ClientSettings']
