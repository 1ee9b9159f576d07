"""Business listing models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SellerInfo(BaseModel):
    """Contact details published with a listing."""

    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    broker_info: Optional[str] = None


class BusinessDetails(BaseModel):
    """Deal terms published with a listing."""

    owner_role: Optional[str] = None
    reason_for_selling: Optional[str] = None
    training_provided: Optional[str] = None
    real_estate_included: Optional[bool] = None
    assets: list[str] = Field(default_factory=list)


class BusinessCreate(BaseModel):
    """Fields supplied by the catalog when a listing is added."""

    name: str = Field(description="Listing name")
    description: str = Field(default="", description="Listing description")
    location: str = Field(description="'City, State'")
    industry: str = Field(description="Industry label")
    asking_price: int = Field(ge=0, description="Asking price in USD")
    annual_revenue: int = Field(default=0, ge=0, description="Annual revenue in USD")
    cash_flow: int = Field(default=0, description="Seller's discretionary cash flow in USD")
    ebitda: int = Field(default=0, description="EBITDA in USD")
    employees: int = Field(default=0, ge=0)
    year_established: Optional[int] = None

    source_url: str = ""
    source_site: str = ""
    seller_info: Optional[SellerInfo] = None
    business_details: Optional[BusinessDetails] = None


class Business(BusinessCreate):
    """A stored listing. Read-only input to the ranking engine."""

    model_config = ConfigDict(frozen=True)

    id: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
