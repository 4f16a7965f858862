"""Dashboard Routes — revenue chart, latest invoices and summary cards."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.infrastructure.database import DatabaseSessionManager, get_db, get_db_manager
from app.schemas.dashboard import CardData, LatestInvoice, RevenueRow
from app.services.invoice_queries import (
    fetch_card_data, fetch_latest_invoices, fetch_revenue,
)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/revenue", response_model=list[RevenueRow])
async def revenue(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await fetch_revenue(db, settings.revenue_fetch_delay_seconds)


@router.get("/latest-invoices", response_model=list[LatestInvoice])
async def latest_invoices(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await fetch_latest_invoices(
        db, settings.latest_invoices_fetch_delay_seconds,
    )


@router.get("/cards", response_model=CardData)
async def cards(db_manager: DatabaseSessionManager = Depends(get_db_manager)):
    return await fetch_card_data(db_manager)
