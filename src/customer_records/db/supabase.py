"""Supabase client for the customer records backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.info("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


# Tables read by the customer repository:
#
# document_types(id, name, code, active)
# purchase_statuses(id, name, code, active)
# customers(id, document_type_id, document_number, first_name, last_name,
#           email, phone, registered_at, active)
# purchases(id, customer_id, invoice_number, purchase_date, amount,
#           description, status_id, created_at)
