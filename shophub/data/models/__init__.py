#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shophub.data.models.user import UserModel
from shophub.data.models.category import CategoryModel
from shophub.data.models.product import ProductModel
from shophub.data.models.cart_line import CartLineModel
from shophub.data.models.order import OrderModel
from shophub.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "CartLineModel",
    "OrderModel",
    "OrderItemModel",
]
