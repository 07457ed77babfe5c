"""
SQLAlchemy Customer model
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from order_fulfillment.database import Base


class Customer(Base):
    """Customer database model"""
    
    __tablename__ = "customers"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    
    orders = relationship("Order", back_populates="customer")
    
    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.name}', email='{self.email}')>"
