from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class InventoryRequest(BaseModel):
    """Delivery of a product into a warehouse, as posted by the client."""

    product_id: int = Field(alias="IdProduct")
    warehouse_id: int = Field(alias="IdWarehouse")
    amount: int = Field(alias="Amount")
    created_at: datetime = Field(alias="CreatedAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        # Tables store naive UTC timestamps
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class ProductWarehouseOut(BaseModel):
    product_warehouse_id: int | None = Field(alias="ProductWarehouseId")

    model_config = {"populate_by_name": True}
