from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Order(Base):
    """Purchase order awaiting delivery into a warehouse."""

    __tablename__ = "OrderTable"

    id: Mapped[int] = mapped_column("IdOrder", Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column("IdProduct", Integer, ForeignKey("Product.IdProduct"), nullable=False)
    amount: Mapped[int] = mapped_column("Amount", Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column("CreatedAt", DateTime, nullable=False)
    fulfilled_at: Mapped[datetime | None] = mapped_column("FulfilledAt", DateTime, nullable=True)  # NULL = open
