"""
FastAPI integration module.

Provides helpers and utilities for integrating beanwire with FastAPI.
"""

from .integration import (
    container_lifespan,
    create_fastapi_dependency,
    create_state_dependency,
)

__all__ = [
    "create_fastapi_dependency",
    "create_state_dependency",
    "container_lifespan",
]
