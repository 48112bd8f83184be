# shophub/domain/promotions.py
"""Banery na strone glowna. Na razie statyczne, bez tabeli w bazie."""

PROMOTIONS = (
    {
        "id": 1,
        "title": "Welcome to ShopHub",
        "subtitle": "Discover amazing products at unbeatable prices",
        "description": "Shop the latest trends and essentials with our wide selection of products",
        "image_url": "https://images.unsplash.com/photo-1441986300917-64674bd600d8?w=800&h=400&fit=crop",
        "button_text": "Shop Now",
        "button_link": "/products",
        "background_color": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
        "text_color": "white",
    },
    {
        "id": 2,
        "title": "New Arrivals",
        "subtitle": "Check out our latest collection",
        "description": "Explore trending products and exclusive deals",
        "image_url": "https://images.unsplash.com/photo-1441984904996-e0b6ba687e04?w=800&h=400&fit=crop",
        "button_text": "Explore New Products",
        "button_link": "/products",
        "background_color": "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",
        "text_color": "white",
    },
)
