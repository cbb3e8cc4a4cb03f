# expense_backend/workflow.py
import logging

from .categorizer import FALLBACK_CATEGORY, normalize_category
from .errors import ForbiddenError
from .models import Expense

logger = logging.getLogger("expense-backend")


class ExpenseWorkflow:
    """Classify-then-persist sequence plus owner-scoped listing and deletion.

    Every read and delete is filtered by the caller's user id; the only way to
    write under another user id is an elevated manual insert.
    """

    def __init__(self, store, classifier, currency="INR", currency_symbol="₹"):
        self.store = store
        self.classifier = classifier
        self.currency = currency
        self.currency_symbol = currency_symbol

    def _persist(self, expense):
        row = self.store.insert_expense(expense.to_row())
        return Expense.from_row(row)

    def submit(self, identity, amount, description):
        # the store write waits on the category
        category = self.classifier.categorize(description)
        expense = self._persist(Expense(
            user_id=identity.id,
            amount=amount,
            description=description,
            category=category,
            currency=self.currency,
            currency_symbol=self.currency_symbol,
        ))
        logger.info(f"Expense {expense.id} added for user {identity.id} ({category})")
        return expense

    def submit_manual(self, identity, amount, description, category=None, user_id=None, elevated=False):
        """Insert without classification; ``category`` defaults to "Other".

        Writing under a ``user_id`` other than the caller's needs ``elevated``.
        """
        owner = user_id or identity.id
        if owner != identity.id and not elevated:
            logger.warning(f"User {identity.id} tried to add an expense for {owner}")
            raise ForbiddenError()

        expense = self._persist(Expense(
            user_id=owner,
            amount=amount,
            description=description,
            category=normalize_category(category) if category else FALLBACK_CATEGORY,
            currency=self.currency,
            currency_symbol=self.currency_symbol,
        ))
        logger.info(f"Manual expense {expense.id} added for user {owner} by {identity.id}")
        return expense

    def list(self, identity):
        rows = self.store.list_expenses(identity.id)
        return [Expense.from_row(r) for r in rows]

    def remove(self, identity, expense_id):
        """Delete if owned by the caller. Unknown or foreign ids are a no-op."""
        deleted = self.store.delete_expense(expense_id, identity.id)
        if not deleted:
            logger.info(f"Delete of expense {expense_id} by user {identity.id} matched no rows")
        return deleted
