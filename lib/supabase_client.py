# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase operations.
# It implements the singleton pattern to reuse client connections
# and provides specialized methods for:
# - Invoice writes (insert / update / delete), one statement each
# - Invoice listing for the dashboard
# - Password sign-in against Supabase Auth
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   SupabaseClient.insert_invoice({"customer_id": ..., "amount": 1550, ...})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code per failed operation plus a suggestion on how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase operations.

    Implements singleton pattern - one client instance per key is shared
    across the application. All methods are class methods for easy access
    without instantiation.

    Example:
        row = SupabaseClient.insert_invoice({
            "customer_id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
            "amount": 1550,
            "status": "pending",
            "date": "2026-10-16",
        })
    """

    _instance: Client | None = None
    _auth_instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def get_auth_client(cls) -> Client:
        """
        Get or create the Supabase client used for end-user sign-in.

        Uses the anon key so password sign-in goes through the public
        auth endpoints, exactly as a browser client would.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._auth_instance is None:
            try:
                cls._auth_instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_ANON_KEY
                )
                logger.info("Supabase auth client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase auth client: {e}",
                    code="AUTH_CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
                )
        return cls._auth_instance

    # -------------------------------------------------------------------------
    # Invoice Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_invoices(cls, limit: int = 100) -> list[dict[str, Any]]:
        """
        Fetch invoices for the dashboard listing, newest first.

        Args:
            limit: Maximum number of invoices to return (default: 100)

        Returns:
            List of invoice dicts with keys id, customer_id, amount, status, date

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(INVOICES_TABLE)
                .select("id, customer_id, amount, status, date")
                .order("date", desc=True)
                .limit(limit)
                .execute()
            )

            invoices = response.data or []
            logger.debug(f"Fetched {len(invoices)} invoices")
            return invoices

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch invoices: {e}",
                code="FETCH_INVOICES_FAILED",
                suggestion="Check that the invoices table exists and is accessible",
                details={"limit": limit}
            )

    # -------------------------------------------------------------------------
    # Invoice Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_invoice(cls, data: dict[str, Any]) -> dict[str, Any] | None:
        """
        Insert one invoice row.

        The id is generated by the database.

        Args:
            data: Column values (customer_id, amount, status, date)

        Returns:
            Inserted invoice dict, or None if the server returned no representation

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(INVOICES_TABLE)
                .insert(data)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert invoice: {e}",
                code="INSERT_INVOICE_FAILED",
                suggestion="Check that customer_id references an existing customer",
                details={"customer_id": data.get("customer_id")}
            )

    @classmethod
    def update_invoice(
        cls,
        invoice_id: str | UUID,
        data: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Update one invoice row in place.

        Args:
            invoice_id: The invoice UUID
            data: Column values to set

        Returns:
            List of updated rows (empty when no invoice has this id)

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        invoice_id_str = normalize_uuid(invoice_id)

        try:
            response = (
                client.table(INVOICES_TABLE)
                .update(data)
                .eq("id", invoice_id_str)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update invoice: {e}",
                code="UPDATE_INVOICE_FAILED",
                details={"invoice_id": invoice_id_str}
            )

    @classmethod
    def delete_invoice(cls, invoice_id: str | UUID) -> list[dict[str, Any]]:
        """
        Delete one invoice row.

        Deleting an id that does not exist is not an error.

        Args:
            invoice_id: The invoice UUID

        Returns:
            List of deleted rows (empty when nothing matched)

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        invoice_id_str = normalize_uuid(invoice_id)

        try:
            response = (
                client.table(INVOICES_TABLE)
                .delete()
                .eq("id", invoice_id_str)
                .execute()
            )
            deleted = response.data or []
            logger.debug(f"Deleted {len(deleted)} rows for invoice {invoice_id_str}")
            return deleted

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete invoice: {e}",
                code="DELETE_INVOICE_FAILED",
                details={"invoice_id": invoice_id_str}
            )

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    @classmethod
    def sign_in_with_password(cls, email: str, password: str) -> Any:
        """
        Sign in an end user with email and password.

        Provider errors (supabase AuthError and subclasses) are not wrapped,
        callers classify them.

        Returns:
            The AuthResponse from Supabase (has .session and .user)
        """
        client = cls.get_auth_client()
        return client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
