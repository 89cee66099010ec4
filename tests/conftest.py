# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides common fixtures for testing
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest

from lib.supabase_client import SupabaseClient


# =============================================================================
# Helpers
# =============================================================================

class RecordingEffects:
    """ActionEffects that remembers what the service asked for."""

    def __init__(self):
        self.revalidated: list[str] = []
        self.redirects: list[str] = []

    def revalidate_path(self, path: str) -> None:
        self.revalidated.append(path)

    def redirect(self, path: str) -> None:
        self.redirects.append(path)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def customer_id():
    """A well-formed customer UUID."""
    return "3958dc9e-712f-4377-85e9-fec4b6a6442a"


@pytest.fixture
def invoice_id():
    """A well-formed invoice UUID."""
    return "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"


@pytest.fixture
def invoice_form(customer_id):
    """A valid create/edit form submission."""
    return {
        "customerId": customer_id,
        "amount": "15.50",
        "status": "pending",
    }


@pytest.fixture
def effects():
    """Recorder for revalidate/redirect calls."""
    return RecordingEffects()


@pytest.fixture
def mock_db():
    """Stand-in for the SupabaseClient wrapper class."""
    db = MagicMock(spec=SupabaseClient)
    db.insert_invoice.return_value = {"id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"}
    db.update_invoice.return_value = []
    db.delete_invoice.return_value = []
    db.fetch_invoices.return_value = []
    return db
