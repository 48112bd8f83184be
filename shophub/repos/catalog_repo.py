# shophub/repos/catalog_repo.py
from typing import List, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session, contains_eager

from shophub.data.models.category import CategoryModel
from shophub.data.models.product import ProductModel
from shophub.domain.catalog import Page, ProductQuery, SortField, SortOrder

_SORT_COLUMNS = {
    SortField.NAME: ProductModel.name,
    SortField.PRICE: ProductModel.price,
    SortField.RATING: ProductModel.rating,
}


def _order_by(sort_by: SortField, sort_order: SortOrder):
    column = _SORT_COLUMNS[sort_by]
    primary = column.desc() if sort_order is SortOrder.DESC else column.asc()
    #id jako drugi klucz zeby stronicowanie bylo stabilne
    return primary, ProductModel.id.asc()


def _like(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    def _products(self):
        return (
            select(ProductModel)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .options(contains_eager(ProductModel.category))
        )

    def _count(self, *clauses) -> int:
        stmt = (
            select(func.count(ProductModel.id))
            .select_from(ProductModel)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .where(*clauses)
        )
        return self.db.execute(stmt).scalar_one()

    def _page(self, clauses, order_by, page: Page) -> Tuple[List[ProductModel], int]:
        total = self._count(*clauses)
        rows = self.db.execute(
            self._products()
            .where(*clauses)
            .order_by(*order_by)
            .offset(page.offset)
            .limit(page.limit)
        ).scalars().all()
        return list(rows), total

    # =====================================================
    # PRODUCTS
    # =====================================================
    def list_products(self, query: ProductQuery) -> Tuple[List[ProductModel], int]:
        clauses = []

        if query.category_slug:
            clauses.append(CategoryModel.slug == query.category_slug)
        if query.min_price is not None:
            clauses.append(ProductModel.price >= query.min_price)
        if query.max_price is not None:
            clauses.append(ProductModel.price <= query.max_price)
        if query.search:
            term = _like(query.search)
            clauses.append(
                or_(
                    ProductModel.name.ilike(term, escape="\\"),
                    ProductModel.description.ilike(term, escape="\\"),
                    ProductModel.brand.ilike(term, escape="\\"),
                )
            )

        return self._page(clauses, _order_by(query.sort_by, query.sort_order), query.page)

    def list_by_category(
        self,
        category_id: int,
        page: Page,
        sort_by: SortField = SortField.NAME,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> Tuple[List[ProductModel], int]:
        clauses = [ProductModel.category_id == category_id]
        return self._page(clauses, _order_by(sort_by, sort_order), page)

    def search(self, text: str, page: Page) -> Tuple[List[ProductModel], int]:
        term = _like(text)
        clauses = [
            or_(
                ProductModel.name.ilike(term, escape="\\"),
                ProductModel.description.ilike(term, escape="\\"),
                ProductModel.brand.ilike(term, escape="\\"),
                CategoryModel.name.ilike(term, escape="\\"),
            )
        ]
        order_by = (ProductModel.rating.desc(), ProductModel.name.asc(), ProductModel.id.asc())
        return self._page(clauses, order_by, page)

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            self._products().where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def related_products(self, product: ProductModel, limit: int) -> List[ProductModel]:
        if product.category_id is None:
            return []
        return list(
            self.db.execute(
                self._products()
                .where(
                    ProductModel.category_id == product.category_id,
                    ProductModel.id != product.id,
                    ProductModel.stock > 0,
                )
                .order_by(ProductModel.rating.desc(), ProductModel.id.asc())
                .limit(limit)
            ).scalars().all()
        )

    def featured_products(self, limit: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                self._products()
                .where(ProductModel.stock > 0)
                .order_by(ProductModel.rating.desc(), ProductModel.stock.desc(), ProductModel.id.asc())
                .limit(limit)
            ).scalars().all()
        )

    def suggest_products(self, text: str, limit: int = 5) -> List[ProductModel]:
        term = _like(text)
        return list(
            self.db.execute(
                select(ProductModel)
                .where(
                    or_(
                        ProductModel.name.ilike(term, escape="\\"),
                        ProductModel.description.ilike(term, escape="\\"),
                    )
                )
                .order_by(ProductModel.id.asc())
                .limit(limit)
            ).scalars().all()
        )

    def count_products(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    # =====================================================
    # STOCK (tylko checkout / anulowanie)
    # =====================================================
    def get_stock(self, product_id: int) -> int:
        #swiezy odczyt z bazy, z pominieciem identity map
        return self.db.execute(
            select(ProductModel.stock).where(ProductModel.id == product_id)
        ).scalar_one_or_none() or 0

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        UPDATE products SET stock = stock - :q WHERE id = :id AND stock >= :q
        0 rows affected = ktos nas uprzedzil, stan nie moze zejsc ponizej zera.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
        )
        return result.rowcount == 1

    def restore_stock(self, product_id: int, quantity: int) -> None:
        self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + quantity)
        )

    # =====================================================
    # CATEGORIES
    # =====================================================
    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()

    def list_categories(self) -> List[CategoryModel]:
        return list(
            self.db.execute(
                select(CategoryModel).order_by(CategoryModel.name.asc())
            ).scalars().all()
        )

    def list_categories_with_counts(self) -> List[Tuple[CategoryModel, int]]:
        rows = self.db.execute(
            select(CategoryModel, func.count(ProductModel.id))
            .outerjoin(ProductModel, ProductModel.category_id == CategoryModel.id)
            .group_by(CategoryModel.id)
            .order_by(CategoryModel.name.asc())
        ).all()
        return [(category, count) for category, count in rows]

    def suggest_categories(self, text: str, limit: int = 3) -> List[CategoryModel]:
        term = _like(text)
        return list(
            self.db.execute(
                select(CategoryModel)
                .where(
                    or_(
                        CategoryModel.name.ilike(term, escape="\\"),
                        CategoryModel.description.ilike(term, escape="\\"),
                    )
                )
                .order_by(CategoryModel.name.asc())
                .limit(limit)
            ).scalars().all()
        )

    def count_categories(self) -> int:
        return self.db.execute(select(func.count(CategoryModel.id))).scalar_one()

