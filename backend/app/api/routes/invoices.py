"""Invoice Routes — invoice table, edit-form data and form-driven mutations.

Invariants:
    - Successful create/update answer 303 to the invoices view; rejected ones 400 + FormState
    - Delete answers 200 on success, 404 with the failure message otherwise
    - Table reads carry an ETag bound to the invoices view revalidation version
"""

import hashlib
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_revalidator
from app.core.domain_types import INVOICES_VIEW_PATH, MAX_PAGE
from app.core.errors import ResourceNotFoundError
from app.infrastructure.database import get_db
from app.infrastructure.revalidation import PathRevalidator
from app.schemas.invoice import ActionMessage, FormState, InvoiceFormData, InvoicePage
from app.services.invoice_actions import (
    DELETE_SUCCESS_MESSAGE, Redirect,
    create_invoice, delete_invoice, update_invoice,
)
from app.services.invoice_queries import (
    fetch_filtered_invoices, fetch_invoice_by_id, fetch_invoices_pages,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


def _form_response(result: FormState | Redirect) -> Response:
    if isinstance(result, Redirect):
        return RedirectResponse(result.path, status_code=status.HTTP_303_SEE_OTHER)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump(),
    )


@router.get("", response_model=InvoicePage)
async def list_invoices(
    response: Response,
    query: str = Query(""),
    page: int = Query(1, le=MAX_PAGE),
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
):
    """One page of the filtered invoice table plus the page count."""
    invoices = await fetch_filtered_invoices(db, query, page)
    pages = await fetch_invoices_pages(db, query)
    query_key = hashlib.sha1(query.encode("utf-8")).hexdigest()[:12]
    response.headers["ETag"] = revalidator.etag_for(INVOICES_VIEW_PATH, page, query_key)
    response.headers["Cache-Control"] = "no-cache"
    return InvoicePage(invoices=invoices, total_pages=pages)


@router.get("/pages")
async def count_invoice_pages(
    query: str = Query(""), db: AsyncSession = Depends(get_db),
):
    return {"total_pages": await fetch_invoices_pages(db, query)}


@router.get("/{invoice_id}", response_model=InvoiceFormData)
async def get_invoice(invoice_id: UUID, db: AsyncSession = Depends(get_db)):
    """Invoice pre-filled for the edit form."""
    invoice = await fetch_invoice_by_id(db, invoice_id)
    if invoice is None:
        raise ResourceNotFoundError("Invoice", str(invoice_id))
    return invoice


@router.post("")
async def create_invoice_route(
    request: Request,
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
):
    form = await request.form()
    return _form_response(await create_invoice(db, revalidator, form))


@router.put("/{invoice_id}")
async def update_invoice_route(
    invoice_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
):
    form = await request.form()
    return _form_response(await update_invoice(db, revalidator, invoice_id, form))


@router.delete("/{invoice_id}", response_model=ActionMessage)
async def delete_invoice_route(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
    revalidator: PathRevalidator = Depends(get_revalidator),
):
    result = await delete_invoice(db, revalidator, invoice_id)
    if result.message != DELETE_SUCCESS_MESSAGE:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content=result.model_dump(),
        )
    return result
