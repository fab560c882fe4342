"""Read endpoints for news, civic services and opportunities, plus news management."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import NewsCreateRequest, NewsResponse, OpportunityResponse, ServiceResponse
from ..services import (
    create_news,
    delete_news,
    get_news,
    get_opportunity,
    get_optional_user,
    get_service,
    list_news,
    list_opportunities,
    list_services,
)

news_router = APIRouter(prefix="/news", tags=["news"])
services_router = APIRouter(prefix="/services", tags=["services"])
opportunities_router = APIRouter(prefix="/opportunities", tags=["opportunities"])


@news_router.get("", response_model=list[NewsResponse])
async def list_news_endpoint(db: Session = Depends(get_session)) -> list[NewsResponse]:
    return [NewsResponse.model_validate(item) for item in list_news(db)]


@news_router.get("/{news_id}", response_model=NewsResponse)
async def get_news_endpoint(news_id: UUID, db: Session = Depends(get_session)) -> NewsResponse:
    return NewsResponse.model_validate(get_news(db, news_id))


@news_router.post("", response_model=NewsResponse, status_code=status.HTTP_201_CREATED)
async def create_news_endpoint(
    payload: NewsCreateRequest,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> NewsResponse:
    item = create_news(
        db,
        actor=current_user,
        title=payload.title,
        summary=payload.summary,
        content=payload.content,
        date=payload.date,
        image_url=payload.image_url,
    )
    return NewsResponse.model_validate(item)


@news_router.delete("/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_news_endpoint(
    news_id: UUID,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> Response:
    delete_news(db, actor=current_user, news_id=news_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@services_router.get("", response_model=list[ServiceResponse])
async def list_services_endpoint(db: Session = Depends(get_session)) -> list[ServiceResponse]:
    return [ServiceResponse.model_validate(item) for item in list_services(db)]


@services_router.get("/{service_id}", response_model=ServiceResponse)
async def get_service_endpoint(service_id: UUID, db: Session = Depends(get_session)) -> ServiceResponse:
    return ServiceResponse.model_validate(get_service(db, service_id))


@opportunities_router.get("", response_model=list[OpportunityResponse])
async def list_opportunities_endpoint(db: Session = Depends(get_session)) -> list[OpportunityResponse]:
    return [OpportunityResponse.model_validate(item) for item in list_opportunities(db)]


@opportunities_router.get("/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity_endpoint(opportunity_id: UUID, db: Session = Depends(get_session)) -> OpportunityResponse:
    return OpportunityResponse.model_validate(get_opportunity(db, opportunity_id))


__all__ = ["news_router", "services_router", "opportunities_router"]
