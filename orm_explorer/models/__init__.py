# ==============================================
# TOPIC 2: MODELS
# ==============================================
#
# Dataclass models and the table metadata attached to them.
#
# Modules:
# --------
# - model.py        → @table / column() declarations, ModelRegistry
# - demo_models.py  → User, UserActivity, ProductPart, Product
#
# ==============================================

from .model import (
    ColumnInfo,
    ColumnOptions,
    ModelError,
    ModelRegistry,
    TableInfo,
    column,
    from_row,
    table,
    to_row,
)
from .demo_models import DEMO_MODELS, Product, ProductPart, User, UserActivity

__all__ = [
    "ColumnInfo",
    "ColumnOptions",
    "ModelError",
    "ModelRegistry",
    "TableInfo",
    "column",
    "from_row",
    "table",
    "to_row",
    "DEMO_MODELS",
    "Product",
    "ProductPart",
    "User",
    "UserActivity",
]
