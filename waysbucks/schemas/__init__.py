# __init__.py
from waysbucks.schemas.product import CreateProductRequest, ProductResponse, UpdateProductRequest
from waysbucks.schemas.profile import CreateProfileRequest, ProfileResponse, UpdateProfileRequest
from waysbucks.schemas.result import ErrorResult, SuccessResult, success
from waysbucks.schemas.user import LoginResponse, TokenData, UserBrief, UserCreate, UserLogin, UserRead, UserUpdate

__all__ = [
	"CreateProductRequest",
	"ProductResponse",
	"UpdateProductRequest",
	"CreateProfileRequest",
	"ProfileResponse",
	"UpdateProfileRequest",
	"ErrorResult",
	"SuccessResult",
	"success",
	"LoginResponse",
	"TokenData",
	"UserBrief",
	"UserCreate",
	"UserLogin",
	"UserRead",
	"UserUpdate",
]
