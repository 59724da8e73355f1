"""
Product repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from waysbucks.models.product import Product
from waysbucks.repositories.base_repository import BaseRepository


class ProductRepository(BaseRepository[Product]):
    def __init__(self, db: Session):
        super().__init__(db, Product)

    def find_products(self) -> List[Product]:
        return self.get_all()

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.get_by_id(product_id)

    def create_product(self, product: Product) -> Product:
        return self.create(product)

    def update_product(self, product: Product) -> Product:
        return self.update(product)

    def delete_product(self, product: Product) -> Product:
        return self.delete(product)
