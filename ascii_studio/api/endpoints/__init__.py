"""
API endpoints for ASCII Studio.

This module contains all the REST API endpoints for the service.
"""

from .generate import generate_bp
from .health import health_bp

__all__ = [
    'generate_bp',
    'health_bp'
]
