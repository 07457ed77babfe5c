"""
Product Repository - Data Access Layer
"""
from typing import Optional

from order_fulfillment.models.product import Product
from order_fulfillment.repositories.base import Repository


class ProductRepository(Repository[Product]):
    """Repository for Product CRUD operations"""
    
    model = Product
    
    def get_for_update(self, product_id: int) -> Optional[Product]:
        """
        Read a product for a stock check, locking the row where the
        backend supports it

        Within one session a product already loaded keeps its pending
        changes, so two lines for the same product see each other's
        decrements. Use a fresh session per order to get live stock.
        """
        return (
            self.db.query(Product)
            .filter(Product.id == product_id)
            .with_for_update()
            .first()
        )
