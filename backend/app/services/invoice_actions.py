"""Invoice Actions — form-driven create/update/delete of invoices, and sign-in.

Invariants:
    - Invalid forms return FormState with per-field messages and touch no rows
    - Amounts are persisted as integer cents (banker's rounding at the cent)
    - Store failures return a generic FormState/ActionMessage; the original error
      is logged, never returned
    - The invoices view is revalidated only after a commit succeeded
    - update never changes the invoice date
    - authenticate returns AuthFailure.INVALID_CREDENTIALS for rejected credentials
      and re-raises every other failure unchanged

Design Decisions:
    - Missing rows on update/delete are detected from the statement rowcount and
      reported with the same message as store failures
    - Redirect is a plain value: the route layer turns it into a 303
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import INVOICES_VIEW_PATH, AuthFailure, InvoiceId
from app.core.errors import AuthenticationError
from app.core.repository_protocols import IdentityProvider, Revalidator
from app.models.invoice import Invoice
from app.schemas.invoice import (
    ActionMessage, FormState, field_errors, parse_invoice_form,
)

logger = logging.getLogger(__name__)

CREATE_INVALID_MESSAGE = "Missing Fields. Failed to Create Invoice."
CREATE_FAILED_MESSAGE = "Database Error: Failed to Create Invoice."
UPDATE_INVALID_MESSAGE = "Missing Fields. Failed to Update Invoice."
UPDATE_FAILED_MESSAGE = "Database Error: Failed to Update Invoice."
DELETE_SUCCESS_MESSAGE = "Deleted Invoice."
DELETE_FAILED_MESSAGE = "Database Error: Failed to Delete Invoice."


@dataclass(frozen=True)
class Redirect:
    """Successful mutation: send the caller to `path`."""
    path: str


async def create_invoice(
    db: AsyncSession, revalidator: Revalidator, form: Mapping[str, Any],
) -> FormState | Redirect:
    """Validate the form and insert a new invoice dated now."""
    try:
        data = parse_invoice_form(form)
    except ValidationError as e:
        logger.info("Invoice form rejected", extra={"operation": "create_invoice"})
        return FormState(errors=field_errors(e), message=CREATE_INVALID_MESSAGE)

    invoice = Invoice(
        customer_id=data.customer_id,
        amount=data.amount_in_cents,
        status=data.status.value,
        date=datetime.now(timezone.utc),
    )
    try:
        db.add(invoice)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Failed to create invoice: {e}",
            extra={"operation": "create_invoice", "error_code": "DATABASE_ERROR"},
        )
        return FormState(message=CREATE_FAILED_MESSAGE)

    logger.info(
        "Invoice created",
        extra={"operation": "create_invoice", "invoice_id": str(invoice.id)},
    )
    revalidator.revalidate_path(INVOICES_VIEW_PATH)
    return Redirect(INVOICES_VIEW_PATH)


async def update_invoice(
    db: AsyncSession,
    revalidator: Revalidator,
    invoice_id: InvoiceId,
    form: Mapping[str, Any],
) -> FormState | Redirect:
    """Validate the form and overwrite customer, amount and status."""
    try:
        data = parse_invoice_form(form)
    except ValidationError as e:
        logger.info(
            "Invoice form rejected",
            extra={"operation": "update_invoice", "invoice_id": str(invoice_id)},
        )
        return FormState(errors=field_errors(e), message=UPDATE_INVALID_MESSAGE)

    extra = {"operation": "update_invoice", "invoice_id": str(invoice_id)}
    try:
        result = await db.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=data.customer_id,
                amount=data.amount_in_cents,
                status=data.status.value,
            )
        )
        if result.rowcount == 0:
            await db.rollback()
            logger.warning("Invoice to update not found", extra=extra)
            return FormState(message=UPDATE_FAILED_MESSAGE)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to update invoice: {e}", extra=extra)
        return FormState(message=UPDATE_FAILED_MESSAGE)

    revalidator.revalidate_path(INVOICES_VIEW_PATH)
    return Redirect(INVOICES_VIEW_PATH)


async def delete_invoice(
    db: AsyncSession, revalidator: Revalidator, invoice_id: InvoiceId,
) -> ActionMessage:
    extra = {"operation": "delete_invoice", "invoice_id": str(invoice_id)}
    try:
        result = await db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        if result.rowcount == 0:
            await db.rollback()
            logger.warning("Invoice to delete not found", extra=extra)
            return ActionMessage(message=DELETE_FAILED_MESSAGE)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete invoice: {e}", extra=extra)
        return ActionMessage(message=DELETE_FAILED_MESSAGE)

    revalidator.revalidate_path(INVOICES_VIEW_PATH)
    return ActionMessage(message=DELETE_SUCCESS_MESSAGE)


async def authenticate(
    identity: IdentityProvider, credentials: Mapping[str, Any],
) -> AuthFailure | None:
    """Sign in. Returns the sentinel for rejected credentials, None on success."""
    try:
        await identity.sign_in(dict(credentials))
    except AuthenticationError as e:
        if e.failure is AuthFailure.INVALID_CREDENTIALS:
            logger.info("Sign-in rejected", extra={"error_code": e.code})
            return e.failure
        raise
    return None
