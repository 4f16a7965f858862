"""Dashboard Schemas — revenue chart rows, latest invoices and summary cards."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RevenueRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    revenue: int


class LatestInvoice(BaseModel):
    """Recent invoice joined with its customer; amount already formatted."""
    id: UUID
    name: str
    image_url: str
    email: str
    amount: str


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str
