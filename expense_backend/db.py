# expense_backend/db.py
import logging

from supabase import Client, create_client

from .errors import StoreError

logger = logging.getLogger("expense-backend.store")

USERS_TABLE = "users"
EXPENSES_TABLE = "expenses"


class SupabaseStore:
    """Thin adapter over the hosted Supabase tables ``users`` and ``expenses``.

    The client is created on first use so a missing URL or key only fails the
    request that needs the store.
    """

    def __init__(self, url=None, key=None, client: Client = None):
        self._url = url
        self._key = key
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            try:
                self._client = create_client(self._url, self._key)
            except Exception as e:
                logger.exception("Store client creation failed")
                raise StoreError("Store unavailable") from e
        return self._client

    def insert_user(self, user_id, email):
        client = self.client
        try:
            response = client.table(USERS_TABLE).insert({"id": user_id, "email": email}).execute()
        except Exception as e:
            logger.exception("User insert failed")
            raise StoreError("Could not register user") from e
        return response.data[0] if response.data else {"id": user_id, "email": email}

    def insert_expense(self, row):
        """Insert one expense and return the stored row (with id and created_at)."""
        client = self.client
        try:
            response = client.table(EXPENSES_TABLE).insert(row).execute()
        except Exception as e:
            logger.exception("Expense insert failed")
            raise StoreError("Could not save expense") from e
        if not response.data:
            logger.error("Expense insert returned no row")
            raise StoreError("Could not save expense")
        return response.data[0]

    def list_expenses(self, user_id):
        client = self.client
        try:
            response = (
                client.table(EXPENSES_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.exception("Expense listing failed")
            raise StoreError("Could not load expenses") from e
        return response.data or []

    def delete_expense(self, expense_id, user_id):
        """Delete the expense only if it belongs to ``user_id``; returns rows removed."""
        client = self.client
        try:
            response = (
                client.table(EXPENSES_TABLE)
                .delete()
                .eq("id", expense_id)
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            logger.exception("Expense delete failed")
            raise StoreError("Could not delete expense") from e
        return len(response.data or [])
