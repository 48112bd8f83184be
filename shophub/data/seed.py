# shophub/data/seed.py
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shophub.data.models.category import CategoryModel
from shophub.data.models.product import ProductModel
from shophub.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = [
    {"name": "Electronics", "slug": "electronics", "description": "Latest electronic devices and gadgets", "icon": "🔌", "color": "primary"},
    {"name": "Clothing", "slug": "clothing", "description": "Fashion and apparel for all ages", "icon": "👕", "color": "success"},
    {"name": "Books", "slug": "books", "description": "Educational and entertainment books", "icon": "📚", "color": "warning"},
    {"name": "Home & Garden", "slug": "home", "description": "Home improvement and garden supplies", "icon": "🏠", "color": "info"},
]

PRODUCTS = [
    {
        "name": "Wireless Bluetooth Headphones",
        "description": "High-quality wireless headphones with noise cancellation",
        "long_description": "Premium wireless Bluetooth headphones with active noise cancellation, 30-hour battery life and all-day comfort.",
        "price": Decimal("99.99"),
        "category": "electronics",
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400&h=300&fit=crop",
        "rating": Decimal("4.5"),
        "stock": 15,
        "brand": "AudioTech",
        "features": ["Active Noise Cancellation", "30-hour Battery Life", "Premium Comfort", "Bluetooth 5.0"],
    },
    {
        "name": "Smart Fitness Watch",
        "description": "Advanced fitness tracking with heart rate monitor",
        "long_description": "Track workouts, heart rate and sleep, and get smartphone notifications on your wrist.",
        "price": Decimal("199.99"),
        "category": "electronics",
        "image_url": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400&h=300&fit=crop",
        "rating": Decimal("4.7"),
        "stock": 8,
        "brand": "FitTech",
        "features": ["Heart Rate Monitor", "GPS Tracking", "Sleep Analysis", "Water Resistant"],
    },
    {
        "name": "Premium Cotton T-Shirt",
        "description": "Soft, breathable cotton t-shirt in various colors",
        "long_description": "100% organic cotton t-shirt with a modern fit and reinforced stitching, available in multiple colors.",
        "price": Decimal("29.99"),
        "category": "clothing",
        "image_url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=400&h=300&fit=crop",
        "rating": Decimal("4.3"),
        "stock": 50,
        "brand": "CottonCo",
        "features": ["100% Organic Cotton", "Modern Fit", "Reinforced Stitching", "Multiple Colors"],
    },
    {
        "name": "Designer Coffee Mug",
        "description": "Beautiful ceramic coffee mug with unique design",
        "long_description": "Microwave-safe ceramic mug with a unique design, perfect for coffee, tea or any hot beverage.",
        "price": Decimal("19.99"),
        "category": "home",
        "image_url": "https://images.unsplash.com/photo-1517668808822-9ebb02f2a0e6?w=400&h=300&fit=crop",
        "rating": Decimal("4.2"),
        "stock": 45,
        "brand": "HomeStyle",
        "features": ["Ceramic Construction", "Unique Designs", "Microwave Safe", "Dishwasher Safe"],
    },
]


def seed(db: Session) -> bool:
    #tylko pusta baza, nic nie nadpisujemy
    if db.execute(select(func.count(CategoryModel.id))).scalar_one():
        logger.info("Dane przykladowe juz istnieja, pomijam seed")
        return False

    categories = {}
    for data in CATEGORIES:
        category = CategoryModel(**data)
        db.add(category)
        categories[data["slug"]] = category
    db.flush()

    for data in PRODUCTS:
        data = dict(data)
        data["category_id"] = categories[data.pop("category")].id
        db.add(ProductModel(**data))

    db.commit()
    logger.info(f"Seed: {len(CATEGORIES)} kategorii, {len(PRODUCTS)} produktow")
    return True
