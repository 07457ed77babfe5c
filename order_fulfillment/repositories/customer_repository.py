"""
Customer Repository - Data Access Layer
"""
from order_fulfillment.models.customer import Customer
from order_fulfillment.repositories.base import Repository


class CustomerRepository(Repository[Customer]):
    """Repository for Customer CRUD operations"""
    
    model = Customer
    
    def exists(self, customer_id: int) -> bool:
        return self.db.query(Customer.id).filter(Customer.id == customer_id).first() is not None
