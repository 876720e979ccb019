"""
Database package for the relational storage backend
"""
from .config import TrackerSettings, get_settings
from .connection import (
    Base,
    DATABASE_ERRORS,
    get_engine,
    get_session_maker,
    init_db,
    close_db
)
from .models import (
    LoanRecord,
    PurchaseRequestRecord
)

__all__ = [
    # Config
    "TrackerSettings",
    "get_settings",
    # Connection
    "Base",
    "DATABASE_ERRORS",
    "get_engine",
    "get_session_maker",
    "init_db",
    "close_db",
    # Models
    "LoanRecord",
    "PurchaseRequestRecord"
]
