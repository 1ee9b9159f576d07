"""API routes for Business Match."""

import logging
import sys
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Query, Request
from pydantic import BaseModel, Field

from app.context import AppContext
from app.data import SAMPLE_BUSINESSES
from app.errors import NotFoundError
from app.models import (
    Business,
    BusinessCreate,
    BusinessScore,
    PreferencesInput,
    PreferencesUpdate,
    RankedBusiness,
    RankingResult,
    SearchCriteria,
    SearchHistoryEntry,
    UserPreferences,
)
from app.storage import User

logger = logging.getLogger(__name__)

router = APIRouter()


class CreateUserRequest(BaseModel):
    """Request body for registering a user row."""
    username: str
    email: Optional[str] = None


class PreferencesResponse(BaseModel):
    preferences: Optional[UserPreferences]


class BusinessListResponse(BaseModel):
    businesses: list[Business]
    count: int


class SearchResponse(BusinessListResponse):
    query: str


class BusinessDetailResponse(BaseModel):
    business: Business
    score: Optional[BusinessScore] = None


class RankedResponse(BaseModel):
    businesses: list[RankedBusiness]
    count: int


class RankResponse(BaseModel):
    score: BusinessScore
    ranking: RankingResult


class BatchRankRequest(BaseModel):
    """Request body for ranking several businesses at once."""
    business_ids: list[str] = Field(min_length=1)


class BatchRankResponse(BaseModel):
    rankings: list[RankedBusiness]
    count: int


class HistoryResponse(BaseModel):
    history: list[SearchHistoryEntry]
    count: int


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def optional_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    return x_user_id or None


def require_user(
    user_id: Optional[str] = Depends(optional_user_id),
    ctx: AppContext = Depends(get_context),
) -> str:
    """Caller identity comes from the X-User-Id header; sessions live elsewhere."""
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if ctx.users.get(user_id) is None:
        raise NotFoundError(f"User {user_id} not found")
    return user_id


def require_admin(ctx: AppContext = Depends(get_context)):
    if not ctx.settings.enable_admin_routes:
        raise HTTPException(status_code=404, detail="Not found")


def _range(low: Optional[int], high: Optional[int]) -> Optional[tuple[int, int]]:
    if low is None and high is None:
        return None
    return (low if low is not None else 0, high if high is not None else sys.maxsize)


def catalog_criteria(
    price_min: Optional[int] = None,
    price_max: Optional[int] = None,
    revenue_min: Optional[int] = None,
    revenue_max: Optional[int] = None,
    location: Optional[str] = None,
    industries: Optional[list[str]] = Query(default=None),
    employees: Optional[str] = None,
) -> SearchCriteria:
    return SearchCriteria(
        price_range=_range(price_min, price_max),
        revenue_range=_range(revenue_min, revenue_max),
        location=location or None,
        industries=industries or [],
        employees=employees or None,
    )


# User endpoints
@router.post("/users", response_model=User)
async def create_user(body: CreateUserRequest, ctx: AppContext = Depends(get_context)):
    """Register a user row (account management lives outside this service)."""
    return ctx.users.create(body.username, body.email)


@router.get("/user/preferences", response_model=PreferencesResponse)
async def get_preferences(
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    return PreferencesResponse(preferences=ctx.preferences.get(user_id))


@router.post("/user/preferences", response_model=PreferencesResponse)
async def save_preferences(
    body: PreferencesInput,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    """Create or replace preferences, then re-rank cached scores in the background."""
    preferences = ctx.preferences.save(user_id, body)
    background_tasks.add_task(ctx.ranking.refresh_user_rankings, user_id)
    return PreferencesResponse(preferences=preferences)


@router.put("/user/preferences", response_model=PreferencesResponse)
async def update_preferences(
    body: PreferencesUpdate,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    """Patch preferences, then re-rank cached scores in the background."""
    preferences = ctx.preferences.patch(user_id, body)
    if preferences is None:
        raise HTTPException(status_code=404, detail="Preferences not found")

    background_tasks.add_task(ctx.ranking.refresh_user_rankings, user_id)
    return PreferencesResponse(preferences=preferences)


@router.get("/user/search-history", response_model=HistoryResponse)
async def get_search_history(
    limit: int = Query(default=20, ge=1, le=100),
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    history = ctx.history.list_for_user(user_id, limit=limit)
    return HistoryResponse(history=history, count=len(history))


# Business search and listing endpoints
@router.get("/businesses", response_model=BusinessListResponse)
async def list_businesses(
    criteria: SearchCriteria = Depends(catalog_criteria),
    limit: int = Query(default=20, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    ctx: AppContext = Depends(get_context),
):
    businesses = ctx.catalog.find(criteria, limit=limit, offset=offset)
    return BusinessListResponse(businesses=businesses, count=len(businesses))


@router.get("/businesses/search", response_model=SearchResponse)
async def search_businesses(
    q: str = "",
    criteria: SearchCriteria = Depends(catalog_criteria),
    user_id: Optional[str] = Depends(optional_user_id),
    ctx: AppContext = Depends(get_context),
):
    query = q.strip()
    if len(query) < 2:
        raise HTTPException(status_code=400, detail="Search query must be at least 2 characters")

    businesses = ctx.catalog.search(query, criteria)

    if user_id and ctx.users.get(user_id):
        ctx.history.record(user_id, query, len(businesses), criteria)

    return SearchResponse(businesses=businesses, query=query, count=len(businesses))


# Ranking endpoints (must come before parameterized routes)
@router.get("/businesses/ranked", response_model=RankedResponse)
async def get_ranked_businesses(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    ranked = await ctx.ranking.get_top_ranked_businesses(user_id, limit)
    return RankedResponse(businesses=ranked, count=len(ranked))


@router.post("/businesses/rank-batch", response_model=BatchRankResponse)
async def rank_batch(
    body: BatchRankRequest,
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    businesses = []
    for business_id in body.business_ids:
        business = ctx.catalog.get(business_id)
        if business:
            businesses.append(business)

    rankings = await ctx.ranking.rank_multiple_businesses(businesses, user_id)
    return BatchRankResponse(rankings=rankings, count=len(rankings))


@router.get("/businesses/{business_id}", response_model=BusinessDetailResponse)
async def get_business(
    business_id: str,
    user_id: Optional[str] = Depends(optional_user_id),
    ctx: AppContext = Depends(get_context),
):
    business = ctx.catalog.get(business_id)
    if not business:
        raise HTTPException(status_code=404, detail="Business not found")

    score = ctx.scores.get(user_id, business_id) if user_id else None
    return BusinessDetailResponse(business=business, score=score)


@router.post("/businesses/{business_id}/rank", response_model=RankResponse)
async def rank_business(
    business_id: str,
    user_id: str = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    """Score one business for the caller, replacing any cached score."""
    business = ctx.catalog.get(business_id)
    if not business:
        raise HTTPException(status_code=404, detail="Business not found")

    score, ranking = await ctx.ranking.rank_and_store(user_id, business)
    return RankResponse(score=score, ranking=ranking)


# Admin endpoints for adding sample data (development only)
@router.post("/admin/businesses", response_model=Business, dependencies=[Depends(require_admin)])
async def create_business(body: BusinessCreate, ctx: AppContext = Depends(get_context)):
    return ctx.catalog.create(body)


@router.post(
    "/admin/businesses/seed",
    response_model=BusinessListResponse,
    dependencies=[Depends(require_admin)],
)
async def seed_businesses(ctx: AppContext = Depends(get_context)):
    created = [ctx.catalog.create(b) for b in SAMPLE_BUSINESSES]
    logger.info(f"Seeded {len(created)} sample businesses")
    return BusinessListResponse(businesses=created, count=len(created))


@router.post(
    "/admin/businesses/{business_id}/deactivate",
    dependencies=[Depends(require_admin)],
)
async def deactivate_business(business_id: str, ctx: AppContext = Depends(get_context)):
    if not ctx.catalog.deactivate(business_id):
        raise HTTPException(status_code=404, detail="Business not found")
    return {"success": True}
