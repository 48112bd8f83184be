# shophub/services/catalog_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from shophub.data.models.category import CategoryModel
from shophub.data.models.product import ProductModel
from shophub.domain.catalog import Page, ProductQuery, SortField, SortOrder
from shophub.domain.errors import NotFound, ValidationFailed
from shophub.domain.promotions import PROMOTIONS
from shophub.repos.catalog_repo import CatalogRepo
from shophub.repos.user_repo import UserRepo
from shophub.utils.settings import FEATURED_PRODUCTS_LIMIT, RELATED_PRODUCTS_LIMIT

MIN_SEARCH_LENGTH = 2


def serialize_product(product: ProductModel) -> Dict[str, Any]:
    category = product.category
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "long_description": product.long_description,
        "price": product.price,
        "image_url": product.image_url,
        "rating": product.rating,
        "stock": product.stock,
        "brand": product.brand,
        "features": list(product.features or []),
        "category_id": product.category_id,
        "category_name": category.name if category else None,
        "category_slug": category.slug if category else None,
    }


def serialize_category(category: CategoryModel, product_count: int | None = None) -> Dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "icon": category.icon,
        "color": category.color,
        "product_count": product_count,
    }


class CatalogService:
    """Odczyty katalogu. Stan magazynowy zmienia tylko OrderService."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)
        self.users = UserRepo(db)

    def list_products(self, query: ProductQuery) -> Dict[str, Any]:
        products, total = self.repo.list_products(query)
        return {
            "products": [serialize_product(p) for p in products],
            "pagination": query.page.describe(total, "products"),
            "filters": query.filters(),
        }

    def get_product(self, product_id: int) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        related = self.repo.related_products(product, RELATED_PRODUCTS_LIMIT)
        return {
            "product": serialize_product(product),
            "related_products": [serialize_product(p) for p in related],
        }

    def list_by_category(
        self,
        slug: str,
        page: Page,
        sort_by: SortField = SortField.NAME,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Dict[str, Any]:
        category = self.repo.get_category_by_slug(slug)
        if not category:
            raise NotFound("Category not found")

        products, total = self.repo.list_by_category(category.id, page, sort_by, sort_order)
        return {
            "category": serialize_category(category),
            "products": [serialize_product(p) for p in products],
            "pagination": page.describe(total, "products"),
        }

    def search(self, text: str, page: Page) -> Dict[str, Any]:
        text = (text or "").strip()
        if len(text) < MIN_SEARCH_LENGTH:
            raise ValidationFailed(
                "Search query must be at least 2 characters long",
                [{"field": "query", "msg": "must be at least 2 characters long"}],
            )

        products, total = self.repo.search(text, page)
        return {
            "query": text,
            "products": [serialize_product(p) for p in products],
            "pagination": page.describe(total, "products"),
        }

    def list_categories(self, with_counts: bool = True) -> Dict[str, Any]:
        if with_counts:
            categories = [
                serialize_category(c, count) for c, count in self.repo.list_categories_with_counts()
            ]
        else:
            categories = [serialize_category(c) for c in self.repo.list_categories()]
        return {"categories": categories, "count": len(categories)}

    def featured_products(self) -> Dict[str, Any]:
        products = self.repo.featured_products(FEATURED_PRODUCTS_LIMIT)
        return {
            "products": [serialize_product(p) for p in products],
            "count": len(products),
        }

    def search_suggestions(self, text: str | None) -> Dict[str, Any]:
        text = (text or "").strip()
        if len(text) < MIN_SEARCH_LENGTH:
            return {"suggestions": [], "count": 0}

        suggestions = [
            {
                "type": "product",
                "id": p.id,
                "name": p.name,
                "price": p.price,
                "image_url": p.image_url,
            }
            for p in self.repo.suggest_products(text)
        ]
        suggestions += [
            {
                "type": "category",
                "id": c.id,
                "name": c.name,
                "slug": c.slug,
                "icon": c.icon,
            }
            for c in self.repo.suggest_categories(text)
        ]
        return {"suggestions": suggestions, "count": len(suggestions)}

    def promotions(self) -> Dict[str, Any]:
        promotions = [dict(p) for p in PROMOTIONS]
        return {"promotions": promotions, "count": len(promotions)}

    def home_data(self) -> Dict[str, Any]:
        """Wszystko dla strony glownej w jednym zapytaniu klienta."""
        featured = self.featured_products()["products"]
        categories = self.list_categories(with_counts=False)["categories"]
        promotions = self.promotions()["promotions"]
        return {
            "featured_products": featured,
            "categories": categories,
            "promotions": promotions,
            "meta": {
                "total_products": len(featured),
                "total_categories": len(categories),
                "total_promotions": len(promotions),
            },
        }

    def stats(self) -> Dict[str, int]:
        return {
            "total_products": self.repo.count_products(),
            "total_categories": self.repo.count_categories(),
            "total_users": self.users.count(),
        }
