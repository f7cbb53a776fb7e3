import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medishare.config.database import Base, get_db
from medishare.main import app
from medishare.shared.database.models import (
    Clinic, Medicine, InventoryItem, SurplusPosting, MedicineRequest
)
from medishare.shared.services.inventory_status import InventoryStatusService


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
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ========== DATA FACTORIES ==========

def add_clinic(db, name, **kwargs):
    clinic = Clinic(
        name=name,
        type=kwargs.get("type", "NGO"),
        location=kwargs.get("location", "Dharavi"),
        district=kwargs.get("district", "Mumbai"),
        state=kwargs.get("state", "Maharashtra"),
        contact_person=kwargs.get("contact_person"),
        email=kwargs.get("email"),
    )
    db.add(clinic)
    db.commit()
    db.refresh(clinic)
    return clinic


def add_medicine(db, name="Amoxicillin", strength="500mg"):
    medicine = Medicine(
        name=name,
        generic_name=name,
        category="Antibiotic",
        strength=strength,
        manufacturer="Cipla",
        priority="Essential",
    )
    db.add(medicine)
    db.commit()
    db.refresh(medicine)
    return medicine


def add_inventory(db, clinic, medicine, quantity=2000, days_to_expiry=30, batch="AMX-2024-001"):
    expiry = date.today() + timedelta(days=days_to_expiry)
    item = InventoryItem(
        clinic_id=clinic.id,
        medicine_id=medicine.id,
        batch_number=batch,
        quantity=quantity,
        unit="tablets",
        expiry_date=expiry,
        status=InventoryStatusService.classify(quantity, expiry).value,
        added_date=datetime.now(),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def add_surplus(db, item, quantity=1500, status="Available"):
    posting = SurplusPosting(
        clinic_id=item.clinic_id,
        inventory_item_id=item.id,
        quantity=quantity,
        reason="Near Expiry",
        status=status,
        posted_date=datetime.now(),
    )
    db.add(posting)
    db.commit()
    db.refresh(posting)
    return posting


def add_request(db, clinic, medicine, quantity=1000, urgency="Critical", status="Open"):
    request = MedicineRequest(
        clinic_id=clinic.id,
        medicine_id=medicine.id,
        quantity=quantity,
        unit="tablets",
        urgency=urgency,
        status=status,
        requested_date=datetime.now(),
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


@pytest.fixture
def giver(db):
    return add_clinic(db, "Seva Sadan NGO Clinic")


@pytest.fixture
def receiver(db):
    return add_clinic(
        db, "Gram Swasthya Kendra",
        type="Primary Health Center", location="Kusumpur",
        district="Varanasi", state="Uttar Pradesh"
    )


@pytest.fixture
def medicine(db):
    return add_medicine(db)


@pytest.fixture
def inventory_item(db, giver, medicine):
    return add_inventory(db, giver, medicine)


@pytest.fixture
def surplus(db, inventory_item):
    return add_surplus(db, inventory_item)


@pytest.fixture
def shortage(db, receiver, medicine):
    return add_request(db, receiver, medicine)
