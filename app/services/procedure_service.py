import logging

from sqlalchemy import DateTime, Integer, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.inventory import InventoryRequest

logger = logging.getLogger(__name__)

PARAMETERS = ("IdProduct", "IdWarehouse", "Amount", "CreatedAt")


def build_procedure_call(dialect_name: str, procedure: str) -> str:
    """SQL that runs ``procedure`` with the four request parameters on the given dialect.

    On PostgreSQL the routine must be created as a FUNCTION returning the new
    IdProductWarehouse: it is invoked with SELECT, and a PROCEDURE cannot hand
    a scalar back to SELECT. SQLite has no procedures, so a user function is
    selected the same way.
    """
    if dialect_name in ("mysql", "mariadb"):
        args = ", ".join(f":{p}" for p in PARAMETERS)
        return f"CALL {procedure}({args})"
    if dialect_name == "mssql":
        args = ", ".join(f"@{p} = :{p}" for p in PARAMETERS)
        return f"EXEC {procedure} {args}"
    args = ", ".join(f":{p}" for p in PARAMETERS)
    return f"SELECT {procedure}({args})"


def add_product_to_warehouse_with_procedure(db: Session, data: InventoryRequest, procedure: str):
    """Delegate the whole delivery to a stored procedure and return its scalar result.

    Validation and atomicity are the procedure's job; nothing is checked here.
    """
    sql = build_procedure_call(db.get_bind().dialect.name, procedure)
    stmt = text(sql).bindparams(
        bindparam("IdProduct", type_=Integer),
        bindparam("IdWarehouse", type_=Integer),
        bindparam("Amount", type_=Integer),
        bindparam("CreatedAt", type_=DateTime),
    )
    params = {
        "IdProduct": data.product_id,
        "IdWarehouse": data.warehouse_id,
        "Amount": data.amount,
        "CreatedAt": data.created_at,
    }
    try:
        result = db.execute(stmt, params).scalar()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Procedure %s failed for product=%s warehouse=%s", procedure, data.product_id, data.warehouse_id)
        raise

    logger.info("Procedure %s returned %s", procedure, result)
    return result
