"""
API routers package.
"""
from app.api import health, reviews, chat, auth

__all__ = [
    "health",
    "reviews",
    "chat",
    "auth",
]
