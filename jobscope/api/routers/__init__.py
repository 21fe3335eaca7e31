"""
API Routers package.
"""

from . import jobs, scheduler, live

__all__ = ["jobs", "scheduler", "live"]
