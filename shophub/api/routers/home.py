# shophub/api/routers/home.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shophub.data.database import get_db
from shophub.domain.schemas import (
    CategoryListOut,
    FeaturedOut,
    HomeDataOut,
    PromotionsOut,
    StatsOut,
    SuggestionsOut,
)
from shophub.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/home", tags=["home"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("/featured-products", response_model=FeaturedOut)
def featured_products(db: Session = Depends(get_db)):
    return get_service(db).featured_products()


@router.get("/categories", response_model=CategoryListOut, response_model_exclude_none=True)
def categories(db: Session = Depends(get_db)):
    return get_service(db).list_categories(with_counts=False)


@router.get("/stats", response_model=StatsOut)
def stats(db: Session = Depends(get_db)):
    return get_service(db).stats()


@router.get("/search-suggestions", response_model=SuggestionsOut, response_model_exclude_none=True)
def search_suggestions(q: Optional[str] = None, db: Session = Depends(get_db)):
    return get_service(db).search_suggestions(q)


@router.get("/promotions", response_model=PromotionsOut)
def promotions(db: Session = Depends(get_db)):
    return get_service(db).promotions()


@router.get("/home-data", response_model=HomeDataOut)
def home_data(db: Session = Depends(get_db)):
    return get_service(db).home_data()
