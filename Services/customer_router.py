# Services/customer_router.py
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Any, Optional
import logging

from Models import Customer
from Schemas.customer import CustomerCreate, CustomerResponse, validate_customer_update
from Services import purchase_coordinator
from Services.auth import require_token
from Services.query_params import page_params, sort_direction
from Services.responses import success
from Stores.customers import CustomerStore
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/customer",
    tags=["customers"],
    dependencies=[Depends(require_token)],
    responses={404: {"description": "Customer not found"}},
)


def customer_data(customer: Customer) -> dict:
    return CustomerResponse.model_validate(customer).model_dump(mode="json", by_alias=True)


@router.get("", summary="List customers, optionally filtered by CNIC")
async def list_customers(
    search: Optional[str] = Query(None, description="Exact CNIC; non-numeric terms are ignored"),
    sortBy: Optional[str] = Query(None, description="createdAt or updatedAt"),
    sortOrder: Optional[str] = Query(None, description="asc or desc"),
    pageNumber: Optional[str] = Query(None),
    pageSize: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    page, limit = page_params(pageNumber, pageSize)
    result = CustomerStore(db).list(
        search=search,
        sort_by=sortBy,
        sort_order=sort_direction(sortOrder),
        page=page,
        limit=limit,
    )
    return success(
        "Customers fetched successfully",
        [customer_data(customer) for customer in result.items],
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
        total_items=result.total_items,
    )


@router.get("/{customer_id}")
async def get_customer(
    customer_id: str,
    db: Session = Depends(get_db)
):
    customer = CustomerStore(db).get(customer_id)
    return success("Customer fetched successfully", customer_data(customer))


@router.post("", status_code=status.HTTP_201_CREATED,
             summary="Create a customer and mark the cars in its purchase history as sold")
async def create_customer(
    customer: CustomerCreate,
    db: Session = Depends(get_db)
):
    created = purchase_coordinator.create_customer(db, customer)
    logger.info("Customer %s created", created.id)
    return success("Customer added successfully", customer_data(created))


@router.put("/{customer_id}")
async def update_customer(
    customer_id: str,
    body: Any = Body(None, description="Any subset of name, cnic, address, contact, purchaseHistory"),
    db: Session = Depends(get_db)
):
    # An unknown id is reported before anything is said about the body
    CustomerStore(db).get(customer_id)
    payload = validate_customer_update(body)
    updated = purchase_coordinator.update_customer(db, customer_id, payload)
    return success("Customer updated successfully", customer_data(updated))


@router.delete("/{customer_id}",
               summary="Delete a customer and remove its purchased cars from the inventory")
async def delete_customer(
    customer_id: str,
    db: Session = Depends(get_db)
):
    purchase_coordinator.delete_customer(db, customer_id)
    return success("Customer deleted successfully")
