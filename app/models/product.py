from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Product(Base):
    __tablename__ = "Product"

    id: Mapped[int] = mapped_column("IdProduct", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    description: Mapped[str] = mapped_column("Description", String(200), default="")
    price: Mapped[Decimal] = mapped_column("Price", Numeric(25, 2), nullable=False)
