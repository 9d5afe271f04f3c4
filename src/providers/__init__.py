"""Meme provider implementations.

This module contains concrete implementations of the MemeProvider protocol
defined in src/core/providers.py.
"""

from src.providers.imgflip_provider import ImgflipProvider

__all__ = ["ImgflipProvider"]
