from decimal import Decimal

import pytest

from shophub.domain.catalog import Page, ProductQuery, SortField, SortOrder
from shophub.domain.errors import NotFound, ValidationFailed
from shophub.services.catalog_service import CatalogService

from conftest import make_user


def names(result):
    return [p["name"] for p in result["products"]]


@pytest.fixture
def catalog(db, products):
    return CatalogService(db)


def test_default_listing_sorted_by_name(catalog):
    result = catalog.list_products(ProductQuery())

    assert names(result) == ["Gadget", "Lantern", "Novel", "Orphan Item", "Tent", "Widget"]
    assert result["pagination"]["total_products"] == 6
    assert result["pagination"]["current_page"] == 1
    assert result["filters"]["sort_by"] == "name"


def test_filter_by_category_and_sort_by_price(catalog):
    query = ProductQuery(category_slug="gear", sort_by=SortField.PRICE, sort_order=SortOrder.DESC)

    assert names(catalog.list_products(query)) == ["Tent", "Widget", "Lantern", "Gadget"]


def test_price_range_is_inclusive(catalog):
    query = ProductQuery(min_price=Decimal("10.00"), max_price=Decimal("25.00"))

    assert names(catalog.list_products(query)) == ["Gadget", "Lantern", "Novel"]


def test_inverted_price_range_rejected():
    with pytest.raises(ValidationFailed):
        ProductQuery(min_price=Decimal("30"), max_price=Decimal("10"))


def test_invalid_page_rejected():
    with pytest.raises(ValidationFailed):
        Page(page=0)
    with pytest.raises(ValidationFailed):
        Page(page_size=1000)


def test_listing_text_filter_matches_brand(catalog):
    assert names(catalog.list_products(ProductQuery(search="acme"))) == ["Lantern", "Widget"]


def test_pagination(catalog):
    result = catalog.list_products(ProductQuery(page=Page(page=2, page_size=4)))

    assert names(result) == ["Tent", "Widget"]
    assert result["pagination"] == {
        "current_page": 2,
        "total_pages": 2,
        "total_products": 6,
        "products_per_page": 4,
        "has_next": False,
        "has_prev": True,
    }


def test_product_detail_with_related(catalog, products):
    result = catalog.get_product(products["widget"].id)

    assert result["product"]["features"] == ["Steel", "Waterproof"]
    assert result["product"]["category_slug"] == "gear"
    #Tent nie ma na stanie
    assert [p["name"] for p in result["related_products"]] == ["Gadget", "Lantern"]


def test_product_without_category(catalog, products):
    result = catalog.get_product(products["orphan"].id)

    assert result["product"]["category_name"] is None
    assert result["related_products"] == []


def test_unknown_product(catalog):
    with pytest.raises(NotFound):
        catalog.get_product(9999)


def test_list_by_category(catalog):
    result = catalog.list_by_category("books", Page())

    assert result["category"]["name"] == "Books"
    assert names(result) == ["Novel"]

    with pytest.raises(NotFound):
        catalog.list_by_category("nope", Page())


def test_search_orders_by_rating(catalog):
    result = catalog.search("  acme ", Page())

    assert result["query"] == "acme"
    assert names(result) == ["Widget", "Lantern"]


def test_search_matches_category_name(catalog):
    assert names(catalog.search("books", Page())) == ["Novel"]


def test_search_treats_wildcards_literally(catalog):
    assert names(catalog.search("a_", Page())) == []
    assert names(catalog.search("%%", Page())) == []


def test_search_too_short(catalog):
    with pytest.raises(ValidationFailed):
        catalog.search("a", Page())


def test_featured_skips_out_of_stock(catalog):
    result = catalog.featured_products()

    assert names(result) == ["Gadget", "Widget", "Novel", "Lantern", "Orphan Item"]
    assert result["count"] == 5


def test_categories_with_counts(catalog):
    result = catalog.list_categories()

    assert [(c["slug"], c["product_count"]) for c in result["categories"]] == [("books", 1), ("gear", 4)]
    assert result["count"] == 2


def test_categories_without_counts(catalog):
    result = catalog.list_categories(with_counts=False)

    assert all(c["product_count"] is None for c in result["categories"])


def test_search_suggestions(catalog):
    product_hits = catalog.search_suggestions("lant")
    assert [(s["type"], s["name"]) for s in product_hits["suggestions"]] == [("product", "Lantern")]

    category_hits = catalog.search_suggestions("book")
    assert [(s["type"], s["slug"]) for s in category_hits["suggestions"]] == [("category", "books")]

    assert catalog.search_suggestions("l") == {"suggestions": [], "count": 0}
    assert catalog.search_suggestions(None)["count"] == 0


def test_stats(db, catalog):
    make_user(db, "carol")

    assert catalog.stats() == {"total_products": 6, "total_categories": 2, "total_users": 1}


def test_promotions(catalog):
    result = catalog.promotions()

    assert result["count"] == 2
    assert [p["title"] for p in result["promotions"]] == ["Welcome to ShopHub", "New Arrivals"]


def test_home_data_bundles_featured_categories_and_promotions(catalog):
    result = catalog.home_data()

    assert names({"products": result["featured_products"]}) == ["Gadget", "Widget", "Novel", "Lantern", "Orphan Item"]
    assert [c["slug"] for c in result["categories"]] == ["books", "gear"]
    assert len(result["promotions"]) == 2
    assert result["meta"] == {"total_products": 5, "total_categories": 2, "total_promotions": 2}
