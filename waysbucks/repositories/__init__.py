"""
Repository layer for data access.

Each repository wraps one SQLAlchemy model and is the only place routers
reach the database through.
"""

from waysbucks.repositories.base_repository import BaseRepository
from waysbucks.repositories.product_repository import ProductRepository
from waysbucks.repositories.profile_repository import ProfileRepository
from waysbucks.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
    "ProfileRepository",
    "UserRepository",
]
