"""
Pytest fixtures and configuration for the storefront backend tests

This file provides shared fixtures that can be used across all test modules.

Author: TM3
Date: 2025-10-17
"""
import pytest
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock
from dotenv import load_dotenv

# Load environment variables for tests
load_dotenv()


class FakeDatabase:
    """
    Stand-in for storefront.core.database.Database

    transaction() yields the same MagicMock cursor every time and records
    whether the block committed or rolled back.
    """

    def __init__(self):
        self.cursor = MagicMock()
        self.commits = 0
        self.rollbacks = 0

    @contextmanager
    def transaction(self):
        try:
            yield self.cursor
            self.commits += 1
        except Exception:
            self.rollbacks += 1
            raise


@pytest.fixture
def fake_db():
    """Provides a FakeDatabase with a mock cursor"""
    return FakeDatabase()


@pytest.fixture
def mock_cursor():
    """Provides a bare MagicMock cursor for repository tests"""
    return MagicMock()


@pytest.fixture
def sample_product_row():
    """
    Provides a products row as RealDictCursor returns it
    """
    return {
        "id": "p1",
        "name": "Buckets",
        "price": Decimal("10.00"),
        "description": "Amazon S3 Buckets for scalable storage",
        "stock": 5,
        "image": "/images/placeholder.jpg",
        "created_at": datetime(2025, 10, 17, 12, 0, tzinfo=timezone.utc)
    }


@pytest.fixture
def sample_order_row():
    """
    Provides an orders row with its JSONB items already decoded
    """
    return {
        "id": "o1",
        "customer_id": "c1",
        "customer_name": "Ada Lovelace",
        "customer_email": "ada@example.com",
        "total": Decimal("20.00"),
        "status": "pending",
        "items": [
            {
                "productId": "p1",
                "productName": "Buckets",
                "price": 10.0,
                "quantity": 2,
                "subtotal": 20.0
            }
        ],
        "created_at": datetime(2025, 10, 17, 12, 5, tzinfo=timezone.utc)
    }


@pytest.fixture(scope="session")
def test_database_url():
    """
    Provides the URL of a disposable PostgreSQL database for integration tests

    Integration tests truncate tables, so they only run against
    TEST_DATABASE_URL, never DATABASE_URL.
    """
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not configured")
    return url
