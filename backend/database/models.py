"""
Database Models - SQLAlchemy ORM
Tables for the loan ledger and the purchase request ledger
"""
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .connection import Base


# ==================== LOAN MODEL ====================

class LoanRecord(Base):
    """Loans table - one row per tool or material checkout"""
    __tablename__ = "loans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    loan_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    borrower_name: Mapped[str] = mapped_column(String(255), nullable=False)
    borrower_badge: Mapped[str] = mapped_column(String(50), nullable=False)
    issued_by: Mapped[str] = mapped_column(String(255), nullable=False)
    issued_by_id: Mapped[str] = mapped_column(String(36), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    returned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    returned_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    returned_by_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    __table_args__ = (
        Index('idx_loans_status_created_at', 'status', 'created_at'),
    )


# ==================== PURCHASE REQUEST MODEL ====================

class PurchaseRequestRecord(Base):
    """Purchase requests table"""
    __tablename__ = "purchase_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    requester_name: Mapped[str] = mapped_column(String(255), nullable=False)
    requester_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    requested_at: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    delivered: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        Index('idx_purchase_requests_status_delivered', 'status', 'delivered'),
    )
