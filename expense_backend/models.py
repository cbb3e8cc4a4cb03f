# expense_backend/models.py
# lightweight model classes (rows live in the external store)

class Identity:
    """The authenticated caller, decoded from a bearer token."""

    def __init__(self, id, email=None):
        self.id = id
        self.email = email

    def __eq__(self, other):
        return isinstance(other, Identity) and (self.id, self.email) == (other.id, other.email)

    def __repr__(self):
        return f"Identity(id={self.id!r}, email={self.email!r})"


class User:
    def __init__(self, id, email):
        self.id = id
        self.email = email

    def to_row(self):
        return {"id": self.id, "email": self.email}


class Expense:
    FIELDS = ("id", "user_id", "amount", "description", "category",
              "currency", "currency_symbol", "created_at")

    def __init__(self, id=None, user_id=None, amount=None, description=None, category=None,
                 currency=None, currency_symbol=None, created_at=None):
        self.id = id
        self.user_id = user_id
        self.amount = amount
        self.description = description
        self.category = category
        self.currency = currency
        self.currency_symbol = currency_symbol
        self.created_at = created_at

    @classmethod
    def from_row(cls, row):
        row = row or {}
        return cls(**{field: row.get(field) for field in cls.FIELDS})

    def to_row(self):
        """Columns sent on insert; id and created_at are assigned by the store."""
        row = {field: getattr(self, field) for field in self.FIELDS
               if field not in ("id", "created_at")}
        return {k: v for k, v in row.items() if v is not None or k in ("amount", "description")}

    def to_dict(self):
        return {field: getattr(self, field) for field in self.FIELDS}
