"""Pytest configuration and fixtures for SalesOps tests."""
import os
import tempfile

# Must be set before salesops.config.settings is first imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FLASK_ENV", "testing")
os.environ.setdefault("LOG_FILE_PATH", os.path.join(tempfile.gettempdir(), "salesops-test-logs"))

import pytest
from typing import Dict
from unittest.mock import patch

from salesops.config.database import engine, SessionLocal
from salesops.database.base import Base
import salesops.models  # noqa: F401

OWNER_ID = "user-alice"
OTHER_OWNER_ID = "user-bob"


@pytest.fixture(autouse=True)
def clean_database():
    """Give every test an empty schema."""
    Base.metadata.create_all(bind=engine)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Fixture providing the thread-local database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app():
    """Fixture providing the Flask application with logging left untouched."""
    from salesops.app import create_app

    with patch('salesops.app.setup_logging'):
        application = create_app()
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner_id() -> str:
    return OWNER_ID


@pytest.fixture
def other_owner_id() -> str:
    return OTHER_OWNER_ID


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Headers the upstream auth proxy would forward for the default owner."""
    return {"X-User-ID": OWNER_ID}


@pytest.fixture
def other_auth_headers() -> Dict[str, str]:
    return {"X-User-ID": OTHER_OWNER_ID}


@pytest.fixture
def sample_items():
    """
    Two product lines: 2 x 10.00 and 3 x 5.00.

    Subtotal 35.00.
    """
    return [
        {
            "product_id": 1,
            "product_name": "Widget A",
            "product_sku": "WID-A",
            "unit_price": 10.0,
            "quantity": 2
        },
        {
            "product_id": 2,
            "product_name": "Widget B",
            "product_sku": "WID-B",
            "unit_price": 5.0,
            "quantity": 3
        }
    ]


@pytest.fixture
def sample_quote_data(sample_items):
    """Quote payload with a 10% discount: subtotal 35.00, discount 3.50, total 31.50."""
    return {
        "customer_name": "Acme Corp",
        "customer_email": "buyer@acme.example",
        "customer_phone": "+33 1 23 45 67 89",
        "customer_address": "1 Rue de la Paix, Paris",
        "discount_percent": 10,
        "notes": "Deliver before Q4",
        "valid_until": "2030-12-31",
        "items": sample_items
    }
