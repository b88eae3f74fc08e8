# Services/car_router.py
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile
from typing import Optional, Tuple
import logging

from Models import CarInventory
from Schemas.car import CarResponse, validate_car_payload
from Services.auth import require_token
from Services.query_params import bool_flag, page_params, sort_direction
from Services.responses import success
from Services.uploads import discard_image, read_image, save_image
from Stores.inventory import InventoryStore
from Stores.unit_of_work import UnitOfWork
from database import get_db
from errors import CarMartError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/car-inventory",
    tags=["car inventory"],
    dependencies=[Depends(require_token)],
    responses={404: {"description": "Car not found"}},
)


def car_data(car: CarInventory) -> dict:
    return CarResponse.model_validate(car).model_dump(mode="json", by_alias=True)


async def read_car_request(request: Request) -> Tuple[dict, Optional[UploadFile]]:
    """Split a multipart (or JSON) car write into plain fields and the image part."""
    if request.headers.get("content-type", "").startswith("application/json"):
        body = await request.json()
        return (body if isinstance(body, dict) else {}), None

    form = await request.form()
    fields = {}
    for key in form.keys():
        if key == "image":
            continue
        fields[key] = form.getlist(key) if key == "document" else form.get(key)
    image = form.get("image")
    return fields, image if isinstance(image, UploadFile) else None


@router.get("", summary="List cars with search, availability filter, sorting and paging")
async def list_cars(
    search: Optional[str] = Query(None, description="Matches chasisNo, engineNo, registrationNo, registeredIn, make, modelName"),
    isSold: Optional[str] = Query(None, description="true or false"),
    sortBy: Optional[str] = Query(None, description="mileage, price, modelYear, createdAt or updatedAt"),
    sortOrder: Optional[str] = Query(None, description="asc or desc"),
    pageNumber: Optional[str] = Query(None),
    pageSize: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    page, limit = page_params(pageNumber, pageSize)
    result = InventoryStore(db).list(
        search=search,
        is_sold=bool_flag(isSold),
        sort_by=sortBy,
        sort_order=sort_direction(sortOrder),
        page=page,
        limit=limit,
    )
    return success(
        "Cars fetched successfully",
        [car_data(car) for car in result.items],
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
        total_items=result.total_items,
    )


@router.get("/{car_id}")
async def get_car(
    car_id: str,
    db: Session = Depends(get_db)
):
    car = InventoryStore(db).get(car_id)
    return success("Car fetched successfully", car_data(car))


@router.post("", status_code=status.HTTP_201_CREATED,
             summary="Add a car (multipart form with one image of at most 500 KB)")
async def create_car(
    request: Request,
    db: Session = Depends(get_db)
):
    fields, image = await read_car_request(request)
    content = await read_image(image)
    payload = validate_car_payload(fields)

    filename = save_image(image.filename, content) if content is not None else None
    try:
        with UnitOfWork(db) as uow:
            car = uow.cars.create(payload, filename)
    except CarMartError:
        discard_image(filename)
        raise
    db.refresh(car)
    logger.info("Car %s added to inventory", car.chasis_no)
    return success("Car added successfully", car_data(car))


@router.put("/{car_id}")
async def update_car(
    car_id: str,
    request: Request,
    db: Session = Depends(get_db)
):
    fields, image = await read_car_request(request)
    content = await read_image(image)
    payload = validate_car_payload(fields)

    filename = save_image(image.filename, content) if content is not None else None
    try:
        with UnitOfWork(db) as uow:
            car = uow.cars.update(car_id, payload, filename)
    except CarMartError:
        discard_image(filename)
        raise
    db.refresh(car)
    return success("Car updated successfully", car_data(car))


@router.delete("/{car_id}")
async def delete_car(
    car_id: str,
    db: Session = Depends(get_db)
):
    with UnitOfWork(db) as uow:
        chasis_no = uow.cars.delete(car_id).chasis_no
    logger.info("Car %s deleted from inventory", chasis_no)
    return success("Car deleted successfully")
