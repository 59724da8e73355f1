# products.py
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from waysbucks.models.product import Product
from waysbucks.models.user import User
from waysbucks.repositories import ProductRepository
from waysbucks.routers.dependencies import get_image_uploader, get_product_repository, require_admin
from waysbucks.schemas.product import CreateProductRequest, ProductResponse, UpdateProductRequest
from waysbucks.schemas.result import SuccessResult, success
from waysbucks.services.image_upload import ImageUploader, discard_image, upload_image


router = APIRouter(tags=["products"])

logger = logging.getLogger(__name__)


def _get_product_or_404(product_id: int, products: ProductRepository) -> Product:
    product = products.get_product(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.get("/products", response_model=SuccessResult[list[ProductResponse]])
def find_products(products: ProductRepository = Depends(get_product_repository)) -> SuccessResult[list[ProductResponse]]:
    return success([ProductResponse.model_validate(p) for p in products.find_products()])


@router.get("/product/{product_id}", response_model=SuccessResult[ProductResponse])
def get_product(
    product_id: int,
    products: ProductRepository = Depends(get_product_repository),
) -> SuccessResult[ProductResponse]:
    return success(ProductResponse.model_validate(_get_product_or_404(product_id, products)))


@router.post("/product", response_model=SuccessResult[ProductResponse])
def create_product(
    title: str = Form(..., min_length=1, max_length=255),
    price: int = Form(..., gt=0),
    image: UploadFile = File(...),
    products: ProductRepository = Depends(get_product_repository),
    uploader: ImageUploader = Depends(get_image_uploader),
    admin: User = Depends(require_admin),
) -> SuccessResult[ProductResponse]:
    if not title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title: must not be blank")
    image_url = upload_image(uploader, image)
    if not image_url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product image is required")
    request = CreateProductRequest(title=title.strip(), price=price, image=image_url)

    try:
        data = products.create_product(
            Product(title=request.title, price=request.price, image=request.image, user_id=admin.id)
        )
    except SQLAlchemyError:
        discard_image(uploader, image_url)
        raise
    logger.info("created product_id=%s", data.id)
    return success(ProductResponse.model_validate(data))


@router.patch("/product/{product_id}", response_model=SuccessResult[ProductResponse])
def update_product(
    product_id: int,
    title: str = Form(""),
    price: int = Form(0, ge=0),
    image: UploadFile | None = File(None),
    products: ProductRepository = Depends(get_product_repository),
    uploader: ImageUploader = Depends(get_image_uploader),
    _admin: User = Depends(require_admin),
) -> SuccessResult[ProductResponse]:
    product = _get_product_or_404(product_id, products)
    request = UpdateProductRequest(title=title, price=price, image=upload_image(uploader, image))

    if request.title.strip():
        product.title = request.title.strip()
    if request.price != 0:
        product.price = request.price
    if request.image:
        product.image = request.image

    try:
        data = products.update_product(product)
    except SQLAlchemyError:
        discard_image(uploader, request.image)
        raise
    return success(ProductResponse.model_validate(data))


@router.delete("/product/{product_id}", response_model=SuccessResult[ProductResponse])
def delete_product(
    product_id: int,
    products: ProductRepository = Depends(get_product_repository),
    _admin: User = Depends(require_admin),
) -> SuccessResult[ProductResponse]:
    product = _get_product_or_404(product_id, products)
    response = ProductResponse.model_validate(product)
    products.delete_product(product)
    logger.info("deleted product_id=%s", product_id)
    return success(response)
