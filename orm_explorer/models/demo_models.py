# ==============================================
# Demo Models
# ==============================================
#
# The records the demo works with:
#
#   User         → table "users" (alias "u"), loaded from fixtures
#   UserActivity → one row of the latest-users window query
#                  (not a table, only a scan target)
#   ProductPart  → source record for the mapping example
#   Product      → destination record for the mapping example
#
# ProductPart and Product share only the "id" field; mapping one
# onto the other copies the id and leaves price untouched.
#
# ==============================================

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .model import column, table


@table("users", alias="u")
@dataclass
class User:
    id: Optional[int] = column(None, pk=True, autoincrement=True)
    username: str = column("", notnull=True)
    email: str = column("", notnull=True, unique=True)
    password: str = column("", notnull=True)
    created_at: Optional[datetime] = column(None, nullzero=True, sql_default="CURRENT_TIMESTAMP(6)")


@dataclass
class UserActivity:
    id: int = 0
    updated_at: Optional[datetime] = None


@dataclass
class ProductPart:
    id: str = ""
    correlation_number: int = 0


@dataclass
class Product:
    id: str = ""
    price: float = 0.0


DEMO_MODELS = (User,)
