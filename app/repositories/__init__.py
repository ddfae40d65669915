from app.repositories.customer_repository import CustomerRecord, CustomerRepository
from app.repositories.user_repository import UserRecord, UserRepository

__all__ = ["CustomerRecord", "CustomerRepository", "UserRecord", "UserRepository"]
