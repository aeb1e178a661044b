"""Helpers shared by all ledger entities."""

import uuid
from decimal import Decimal

ZERO = Decimal("0")


def new_id(prefix: str) -> str:
    """Return a fresh entity identifier such as ``pay-3f9c0a1b2d4e``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
