from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base


class UserCustomerRelation(Base):
    """Links a user to a customer they are allowed to see and invoice."""

    __tablename__ = "user_customer_relations"
    __table_args__ = (Index("user_customer_relations_customer_idx", "customer_id"),)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True)

    user = relationship("User", back_populates="customer_links")
    customer = relationship("Customer", back_populates="user_links")
