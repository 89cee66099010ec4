# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# Tests that each invoice operation issues exactly one PostgREST call with the
# right filters, and that failures are wrapped in SupabaseClientError.
#
# get_client() is patched to return a MagicMock, so no network is used.
# =============================================================================

from uuid import UUID
from unittest.mock import MagicMock, patch

import pytest

from lib.supabase_client import INVOICES_TABLE, SupabaseClient, SupabaseClientError


@pytest.fixture
def mock_client():
    """Mocked supabase Client whose query builder chains back to itself."""
    client = MagicMock()
    table = client.table.return_value
    for method in ("select", "insert", "update", "delete", "eq", "order", "limit"):
        getattr(table, method).return_value = table
    table.execute.return_value = MagicMock(data=[])

    with patch.object(SupabaseClient, "get_client", return_value=client):
        yield client


def _table(client):
    return client.table.return_value


class TestInsertInvoice:
    """Tests for SupabaseClient.insert_invoice."""

    def test_insert_sends_row(self, mock_client):
        row = {"customer_id": "c-1", "amount": 1550, "status": "pending", "date": "2026-10-16"}
        _table(mock_client).execute.return_value = MagicMock(data=[{"id": "i-1", **row}])

        result = SupabaseClient.insert_invoice(row)

        mock_client.table.assert_called_once_with(INVOICES_TABLE)
        _table(mock_client).insert.assert_called_once_with(row)
        assert result["id"] == "i-1"

    def test_insert_without_representation(self, mock_client):
        assert SupabaseClient.insert_invoice({"customer_id": "c-1"}) is None

    def test_insert_failure_is_wrapped(self, mock_client):
        _table(mock_client).execute.side_effect = Exception("foreign key violation")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_invoice({"customer_id": "c-1"})

        assert exc_info.value.code == "INSERT_INVOICE_FAILED"
        assert "foreign key violation" in exc_info.value.message
        assert exc_info.value.details == {"customer_id": "c-1"}


class TestUpdateInvoice:
    """Tests for SupabaseClient.update_invoice."""

    def test_update_filters_by_id(self, mock_client, invoice_id):
        SupabaseClient.update_invoice(invoice_id, {"amount": 100})

        _table(mock_client).update.assert_called_once_with({"amount": 100})
        _table(mock_client).eq.assert_called_once_with("id", invoice_id)

    def test_update_accepts_uuid_objects(self, mock_client, invoice_id):
        SupabaseClient.update_invoice(UUID(invoice_id), {"amount": 100})

        _table(mock_client).eq.assert_called_once_with("id", invoice_id)

    def test_update_failure_is_wrapped(self, mock_client, invoice_id):
        _table(mock_client).execute.side_effect = Exception("boom")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.update_invoice(invoice_id, {"amount": 100})

        assert exc_info.value.code == "UPDATE_INVOICE_FAILED"


class TestDeleteInvoice:
    """Tests for SupabaseClient.delete_invoice."""

    def test_delete_filters_by_id(self, mock_client, invoice_id):
        result = SupabaseClient.delete_invoice(invoice_id)

        _table(mock_client).delete.assert_called_once_with()
        _table(mock_client).eq.assert_called_once_with("id", invoice_id)
        assert result == []

    def test_delete_failure_is_wrapped(self, mock_client, invoice_id):
        _table(mock_client).execute.side_effect = Exception("boom")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.delete_invoice(invoice_id)

        assert exc_info.value.code == "DELETE_INVOICE_FAILED"
        assert str(exc_info.value).startswith("[DELETE_INVOICE_FAILED]")


class TestFetchInvoices:
    """Tests for SupabaseClient.fetch_invoices."""

    def test_fetch_orders_newest_first(self, mock_client):
        _table(mock_client).execute.return_value = MagicMock(data=[{"id": "i-1"}])

        result = SupabaseClient.fetch_invoices(limit=10)

        _table(mock_client).order.assert_called_once_with("date", desc=True)
        _table(mock_client).limit.assert_called_once_with(10)
        assert result == [{"id": "i-1"}]

    def test_fetch_none_data(self, mock_client):
        _table(mock_client).execute.return_value = MagicMock(data=None)

        assert SupabaseClient.fetch_invoices() == []


class TestSignIn:
    """Tests for SupabaseClient.sign_in_with_password."""

    def test_uses_auth_client(self):
        auth_client = MagicMock()

        with patch.object(SupabaseClient, "get_auth_client", return_value=auth_client):
            SupabaseClient.sign_in_with_password("user@nextmail.com", "123456")

        auth_client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "user@nextmail.com", "password": "123456"}
        )


class TestClientInit:
    """Tests for singleton creation."""

    def test_create_failure_is_wrapped(self):
        with patch.object(SupabaseClient, "_instance", None), \
                patch("lib.supabase_client.create_client", side_effect=Exception("bad url")):
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.get_client()

        assert exc_info.value.code == "CLIENT_INIT_FAILED"

    def test_client_is_reused(self):
        created = MagicMock()

        with patch.object(SupabaseClient, "_instance", None), \
                patch("lib.supabase_client.create_client", return_value=created) as factory:
            assert SupabaseClient.get_client() is created
            assert SupabaseClient.get_client() is created

        factory.assert_called_once()
