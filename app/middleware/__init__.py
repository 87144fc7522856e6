"""
Middleware package for the Realty Listings API.
"""

from .validation import ValidationMiddleware

__all__ = [
    "ValidationMiddleware"
]
