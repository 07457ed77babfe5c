"""
SQLAlchemy Product model
"""
from decimal import Decimal

from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from order_fulfillment.database import Base


class Product(Base):
    """Product database model"""
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2, asdecimal=True), nullable=False, default=Decimal("0.00"))
    stock = Column(Integer, nullable=False, default=0)
    version_id = Column(Integer, nullable=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )
    
    # Optimistic concurrency: UPDATE ... WHERE version_id = <loaded version>
    __mapper_args__ = {"version_id_col": version_id}
    
    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity
    
    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, stock={self.stock})>"
