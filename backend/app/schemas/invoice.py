"""Invoice Schemas — invoice form validation, form state and invoice read models.

Invariants:
    - InvoiceForm rejects: missing/blank/malformed customerId, non-numeric or
      non-positive amount, status outside {pending, paid}
    - Every failing field is reported; one field failing never hides another
    - Amount is parsed as Decimal (never float), must be worth at least one cent
      and at most MAX_AMOUNT_CENTS (the stored column is a 32-bit integer)

Design Decisions:
    - mode="before" validators raising PydanticCustomError: the message shown to the
      user is exactly the template, without pydantic's "Value error, " prefix
    - Field aliases match the form input names (customerId, amount, status)
"""

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from app.core.currency import from_cents, to_cents
from app.core.domain_types import MAX_AMOUNT_CENTS, CustomerId, InvoiceStatus

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
AMOUNT_INVALID_MESSAGE = "Please enter a valid amount."
STATUS_MESSAGE = "Please select an invoice status."

FORM_FIELDS = ("customerId", "amount", "status")
MAX_AMOUNT = from_cents(MAX_AMOUNT_CENTS)


class InvoiceForm(BaseModel):
    """Validated create/update invoice submission."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: CustomerId = Field(alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, v: Any) -> UUID:
        if isinstance(v, UUID):
            return v
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("customer_required", CUSTOMER_MESSAGE)
        try:
            return UUID(v.strip())
        except ValueError:
            raise PydanticCustomError("customer_required", CUSTOMER_MESSAGE)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> Decimal:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        if isinstance(v, float):
            v = repr(v)
        try:
            amount = Decimal(str(v).strip())
        except InvalidOperation:
            raise PydanticCustomError("amount_invalid", AMOUNT_INVALID_MESSAGE)
        if not amount.is_finite():
            raise PydanticCustomError("amount_invalid", AMOUNT_INVALID_MESSAGE)
        if amount <= 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        if amount > MAX_AMOUNT:
            raise PydanticCustomError("amount_invalid", AMOUNT_INVALID_MESSAGE)
        if to_cents(amount) <= 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def require_status(cls, v: Any) -> str:
        allowed = {s.value for s in InvoiceStatus}
        if isinstance(v, InvoiceStatus):
            return v.value
        if not isinstance(v, str) or v not in allowed:
            raise PydanticCustomError("status_invalid", STATUS_MESSAGE)
        return v

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten a ValidationError into {form field: [messages]}."""
    errors: dict[str, list[str]] = {}
    for e in exc.errors():
        name = str(e["loc"][0]) if e["loc"] else "form"
        errors.setdefault(name, []).append(e["msg"])
    return errors


def parse_invoice_form(form: Mapping[str, Any]) -> InvoiceForm:
    """Validate raw form fields. Absent fields are validated as None."""
    return InvoiceForm.model_validate({name: form.get(name) for name in FORM_FIELDS})


class FormState(BaseModel):
    """Returned to the form when a create/update does not go through."""
    errors: dict[str, list[str]] = Field(default_factory=dict)
    message: str | None = None


class ActionMessage(BaseModel):
    """Outcome of a delete."""
    message: str


class CustomerData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    image_url: str


class InvoiceTableRow(BaseModel):
    """One row of the filtered invoice table, with its customer."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    amount: int
    status: InvoiceStatus
    date: datetime
    customer: CustomerData


class InvoiceFormData(BaseModel):
    """Stored invoice shaped for the edit form; amount in dollars."""
    id: UUID
    customer_id: UUID
    amount: Decimal
    status: InvoiceStatus


class InvoicePage(BaseModel):
    invoices: list[InvoiceTableRow]
    total_pages: int
