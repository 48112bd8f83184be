# shophub/api/routers/products.py
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shophub.data.database import get_db
from shophub.domain.catalog import Page, ProductQuery, SortField, SortOrder
from shophub.domain.schemas import (
    CategoryListOut,
    CategoryProductsOut,
    ProductDetailOut,
    ProductListOut,
    SearchOut,
)
from shophub.services.catalog_service import CatalogService
from shophub.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/api/products", tags=["products"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("", response_model=ProductListOut)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    sort_by: SortField = SortField.NAME,
    sort_order: SortOrder = SortOrder.ASC,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = ProductQuery(
        category_slug=category or None,
        min_price=min_price,
        max_price=max_price,
        search=search or None,
        sort_by=sort_by,
        sort_order=sort_order,
        page=Page(page, limit),
    )
    return get_service(db).list_products(query)


#statyczne sciezki przed /{product_id}
@router.get("/categories/all", response_model=CategoryListOut)
def all_categories(db: Session = Depends(get_db)):
    return get_service(db).list_categories(with_counts=True)


@router.get("/category/{slug}", response_model=CategoryProductsOut)
def products_by_category(
    slug: str,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: SortField = SortField.NAME,
    sort_order: SortOrder = SortOrder.ASC,
    db: Session = Depends(get_db),
):
    return get_service(db).list_by_category(slug, Page(page, limit), sort_by, sort_order)


@router.get("/search/{query}", response_model=SearchOut)
def search_products(
    query: str,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    return get_service(db).search(query, Page(page, limit))


@router.get("/{product_id}", response_model=ProductDetailOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_product(product_id)
