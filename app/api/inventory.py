from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.problems import problem_response
from app.database import get_db
from app.schemas.inventory import InventoryRequest, ProductWarehouseOut
from app.services import inventory_service, procedure_service
from app.services.inventory_service import InventoryError

router = APIRouter(tags=["Inventory"])

ERROR_RESPONSES = {
    400: {"description": "Invalid amount or no matching order", "content": {"text/plain": {}}},
    404: {"description": "Product or warehouse not found", "content": {"text/plain": {}}},
    500: {"description": "Database error", "content": {"application/problem+json": {}}},
}


@router.post(
    "/addProductToWarehouse",
    response_model=ProductWarehouseOut,
    responses=ERROR_RESPONSES,
)
def add_product_to_warehouse(data: InventoryRequest, db: Session = Depends(get_db)):
    try:
        product_warehouse_id = inventory_service.add_product_to_warehouse(db, data)
    except InventoryError as e:
        return PlainTextResponse(str(e), status_code=e.status_code)
    except Exception as e:
        # Already rolled back and logged by the service
        return problem_response(str(e))
    return ProductWarehouseOut(product_warehouse_id=product_warehouse_id)


@router.post(
    "/addProductToWarehouseWithProc",
    response_model=ProductWarehouseOut,
    responses={500: ERROR_RESPONSES[500]},
)
def add_product_to_warehouse_with_proc(data: InventoryRequest, request: Request, db: Session = Depends(get_db)):
    procedure = request.app.state.settings.ADD_PRODUCT_PROCEDURE
    try:
        result = procedure_service.add_product_to_warehouse_with_procedure(db, data, procedure)
    except SQLAlchemyError as e:
        return problem_response(str(e))
    return ProductWarehouseOut(product_warehouse_id=result)
