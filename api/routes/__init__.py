"""
API Routes Module

This module contains all API endpoint implementations organized by function:
- convert.py: Humidity conversion endpoints

All routers are combined in main.py to create the complete API.
"""

from .convert import router as convert_router

__all__ = [
    "convert_router",
]
