from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
from main import app
from services.otp_store import OTPStore, get_aadhaar_otp_store, get_pan_otp_store

VALID_AADHAAR = "234567890124"
VALID_PAN = "ABCDE1234F"


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


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
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def aadhaar_store(clock):
    return OTPStore("Aadhaar", expiry_minutes=5, clock=clock)


@pytest.fixture
def pan_store(clock):
    return OTPStore("PAN", expiry_minutes=5, clock=clock)


@pytest.fixture
def client(engine, aadhaar_store, pan_store):
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = testing_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_aadhaar_otp_store] = lambda: aadhaar_store
    app.dependency_overrides[get_pan_otp_store] = lambda: pan_store
    yield TestClient(app)
    app.dependency_overrides.clear()
