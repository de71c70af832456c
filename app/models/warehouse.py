from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Warehouse(Base):
    __tablename__ = "Warehouse"

    id: Mapped[int] = mapped_column("IdWarehouse", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    address: Mapped[str] = mapped_column("Address", String(200), default="")


class ProductWarehouse(Base):
    """Append-only ledger: one row per fulfilled order delivered to a warehouse."""

    __tablename__ = "Product_Warehouse"

    id: Mapped[int] = mapped_column("IdProductWarehouse", Integer, primary_key=True, autoincrement=True)
    warehouse_id: Mapped[int] = mapped_column("IdWarehouse", Integer, ForeignKey("Warehouse.IdWarehouse"), nullable=False)
    product_id: Mapped[int] = mapped_column("IdProduct", Integer, ForeignKey("Product.IdProduct"), nullable=False)
    order_id: Mapped[int] = mapped_column("IdOrder", Integer, ForeignKey("OrderTable.IdOrder"), nullable=False)
    amount: Mapped[int] = mapped_column("Amount", Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column("Price", Numeric(25, 2), nullable=False)  # unit price * amount
    created_at: Mapped[datetime] = mapped_column("CreatedAt", DateTime, nullable=False)
