from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Dict, List, Optional
from app.store import get_service
from app.schemas.product_schema import MessageOut, ProductOut
from app.services.product_service import ProductService

router = APIRouter(tags=["products"])

@router.post("", summary="Add a product", response_model=ProductOut)
def add_product(
    payload: Dict[str, Any] = Body(...),
    svc: ProductService = Depends(get_service),
):
    """
    payload: { "name": "Drill", "quantity": 3, "serial_number": "SN-1" }
    id and timestamps are assigned by the store.
    """
    return svc.insert_product(payload)

@router.get("", summary="List products", response_model=List[ProductOut])
def list_products(
    include_deleted: bool = Query(False, description="include soft-deleted products"),
    q: Optional[str] = Query(None, description="search term matched against name"),
    svc: ProductService = Depends(get_service),
):
    return svc.get_products(include_deleted=include_deleted, search=q)

@router.get("/{product_id}", summary="Get product by id", response_model=ProductOut)
def get_product(product_id: str, svc: ProductService = Depends(get_service)):
    return svc.get_product(product_id)

@router.post("/delete/{product_id}", summary="Soft-delete a product", response_model=MessageOut)
def delete_product(product_id: str, svc: ProductService = Depends(get_service)):
    return {"message": svc.delete_product(product_id)}

@router.post("/restore/{product_id}", summary="Restore a soft-deleted product", response_model=MessageOut)
def restore_product(product_id: str, svc: ProductService = Depends(get_service)):
    return {"message": svc.restore_product(product_id)}

@router.post("/{product_id}", summary="Update a product", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: Dict[str, Any] = Body(...),
    svc: ProductService = Depends(get_service),
):
    """
    payload: any subset of name, quantity, serial_number, is_deleted
    """
    return svc.update_product(product_id, payload)
