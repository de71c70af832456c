import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.order import Order
from app.models.product import Product
from app.models.warehouse import ProductWarehouse, Warehouse
from app.schemas.inventory import InventoryRequest

logger = logging.getLogger(__name__)


class InventoryError(ValueError):
    """Request rejected by the fulfillment rules."""

    status_code = 400


class InvalidAmountError(InventoryError):
    pass


class ReferenceNotFoundError(InventoryError):
    status_code = 404


class NoMatchingOrderError(InventoryError):
    pass


def _find_open_order(db: Session, data: InventoryRequest) -> int | None:
    """Return the oldest unfulfilled order this delivery can close.

    The row is locked until commit on dialects that support FOR UPDATE.
    """
    row = (
        db.query(Order.id)
        .filter(
            Order.product_id == data.product_id,
            Order.amount <= data.amount,
            Order.created_at <= data.created_at,
            Order.fulfilled_at.is_(None),
        )
        .order_by(Order.created_at, Order.id)
        .with_for_update()
        .first()
    )
    return row.id if row else None


def _mark_fulfilled(db: Session, order_id: int) -> bool:
    updated = (
        db.query(Order)
        .filter(Order.id == order_id, Order.fulfilled_at.is_(None))
        .update({Order.fulfilled_at: func.now()}, synchronize_session=False)
    )
    return updated == 1


def _insert_ledger_row(db: Session, data: InventoryRequest, order_id: int) -> int:
    # Price is read from Product inside the INSERT itself
    unit_total = (
        db.query(Product.price * data.amount)
        .filter(Product.id == data.product_id)
        .scalar_subquery()
    )
    row = ProductWarehouse(
        warehouse_id=data.warehouse_id,
        product_id=data.product_id,
        order_id=order_id,
        amount=data.amount,
        price=unit_total,
        created_at=func.now(),
    )
    db.add(row)
    db.flush()
    return row.id


def add_product_to_warehouse(db: Session, data: InventoryRequest) -> int:
    """Fulfill a matching order and record the delivery in Product_Warehouse.

    Everything runs in the session's single transaction: either the order is
    marked fulfilled and the ledger row exists, or nothing was written.
    Returns the generated IdProductWarehouse.
    """
    try:
        if data.amount <= 0:
            raise InvalidAmountError("Amount must be greater than 0.")

        product = db.query(Product).filter(Product.id == data.product_id).first()
        warehouse = db.query(Warehouse).filter(Warehouse.id == data.warehouse_id).first()
        if not product or not warehouse:
            raise ReferenceNotFoundError("Product or warehouse does not exist.")

        order_id = _find_open_order(db, data)
        if order_id is None:
            raise NoMatchingOrderError("No matching order exists or the order is already fulfilled.")

        # Another request may have fulfilled it since the lookup
        if not _mark_fulfilled(db, order_id):
            raise NoMatchingOrderError("No matching order exists or the order is already fulfilled.")

        product_warehouse_id = _insert_ledger_row(db, data, order_id)
        db.commit()
    except InventoryError as e:
        db.rollback()
        logger.warning(
            "Rejected delivery product=%s warehouse=%s amount=%s: %s",
            data.product_id, data.warehouse_id, data.amount, e,
        )
        raise
    except Exception:
        db.rollback()
        logger.exception(
            "Delivery rolled back for product=%s warehouse=%s", data.product_id, data.warehouse_id
        )
        raise

    logger.info(
        "Order %d fulfilled into warehouse %d (Product_Warehouse %d)",
        order_id, data.warehouse_id, product_warehouse_id,
    )
    return product_warehouse_id
