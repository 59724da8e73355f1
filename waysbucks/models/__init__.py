# __init__.py
from waysbucks.models.product import Product
from waysbucks.models.profile import Profile
from waysbucks.models.user import User

__all__ = [
	"Product",
	"Profile",
	"User",
]
