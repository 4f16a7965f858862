"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CustomerId, InvoiceId wrap UUIDs
    - Cents is always an integer amount of the smallest currency unit
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare equal to their stored column value
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CustomerId = NewType("CustomerId", UUID)
InvoiceId = NewType("InvoiceId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)


# ─── Constants ───────────────────────────────────────────────────

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5
MAX_PAGE = 1_000_000
# invoices.amount is a 32-bit INTEGER column
MAX_AMOUNT_CENTS = 2_147_483_647
INVOICES_VIEW_PATH = "/dashboard/invoices"
DASHBOARD_PATH = "/dashboard"


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class AuthFailure(str, Enum):
    """Why a sign-in failed. INVALID_CREDENTIALS is the expected, user-facing case."""
    INVALID_CREDENTIALS = "CredentialsSignin"
    UNEXPECTED = "UnexpectedSignin"
