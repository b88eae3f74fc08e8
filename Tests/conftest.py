# Tests/conftest.py
"""Shared fixtures: in-memory database, authenticated API client, sample records."""
import os

# Point configuration at throwaway resources before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("JWT_EXPIRE", "1h")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import paths
from Models import Base, CarInventory
from Services.auth import issue_token
from database import get_db
from main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    directory = tmp_path / "uploads"
    directory.mkdir()
    monkeypatch.setattr(paths, "UPLOAD_DIR", directory)
    return directory


@pytest.fixture
def anonymous_client(session_factory, upload_dir):
    """API client without credentials, bound to the test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def client(anonymous_client):
    anonymous_client.headers["Authorization"] = f"Bearer {issue_token('saadshd')}"
    return anonymous_client


def car_fields(**overrides):
    """Multipart form fields for a valid car; pass None to drop a field."""
    fields = {
        "chasisNo": "CN09187",
        "engineNo": "EN09187",
        "make": "Porsche",
        "modelName": "911",
        "variant": "GT3 RS",
        "price": "100000000",
        "modelYear": "2024",
        "fuelType": "Petrol",
        "registeredIn": "Punjab",
        "registrationNo": "VXR 1008",
        "mileage": "1009",
        "transmissionType": "Automatic",
        "taxHistory": "Token/Tax Paid",
        "assembly": "Local",
        "document": ["Original Book", "Fresh Import"],
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}


def image_file(name="car.png", content=PNG_BYTES, content_type="image/png"):
    return {"image": (name, content, content_type)}


def add_car(db, chasis_no, is_sold=False, **overrides):
    """Insert a car straight into the database and commit it."""
    values = dict(
        id=str(uuid.uuid4()),
        chasis_no=chasis_no,
        engine_no=f"E-{chasis_no}",
        make="Toyota",
        model_name="Corolla",
        variant="GLi",
        price=3_500_000,
        model_year=2020,
        mileage=45_000,
        fuel_type="Petrol",
        registered_in="Punjab",
        registration_no="LEB 1234",
        transmission_type="Manual",
        tax_history="Token/Tax Paid",
        assembly="Local",
        document=["Original Book"],
        image="seed.png",
        is_sold=is_sold,
    )
    values.update(overrides)
    car = CarInventory(**values)
    db.add(car)
    db.commit()
    return car


def customer_body(**overrides):
    body = {
        "name": "Saad Shahid",
        "cnic": 3660347880473,
        "address": "Rawalpindi",
        "contact": "03357735290",
        "purchaseHistory": [],
    }
    body.update(overrides)
    return body
