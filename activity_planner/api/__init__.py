"""
Activity Planner API routes.

Each module defines a FastAPI router for one resource; main.py mounts them
under API_PREFIX.
"""

# API prefix shared by all routers
API_PREFIX = "/api"

__all__ = ["API_PREFIX"]
