"""
HTTP persistence API (Flask blueprint mounted on the Dash server).
"""

from .routes import create_api_blueprint

__all__ = ["create_api_blueprint"]
