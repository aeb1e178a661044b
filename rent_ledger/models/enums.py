"""Enumeration types for rent-ledger entities."""

from enum import Enum


class UserRole(str, Enum):
    COLLECTOR = "collector"
    MANAGER = "manager"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"


class LeaseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
