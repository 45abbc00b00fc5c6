# ==============================================
# TOPIC 3: STORAGE (MySQL)
# ==============================================
#
# This package owns the database connection:
# creating model tables, truncating, inserting, querying.
#
# Modules:
# --------
# - mysql_client.py    → MySQL connection and operations
#
# ==============================================

from .mysql_client import MySQLClient, quote_ident

__all__ = [
    "MySQLClient",
    "quote_ident",
]
