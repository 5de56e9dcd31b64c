"""
bylawcheck API Module

Contains the FastAPI backend server.
"""

from bylawcheck.api.server import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
