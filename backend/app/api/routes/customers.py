"""Customer Routes — customer list for the invoice form's select box."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.schemas.invoice import CustomerData
from app.services.invoice_queries import fetch_customers

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("", response_model=list[CustomerData])
async def list_customers(db: AsyncSession = Depends(get_db)):
    return await fetch_customers(db)
