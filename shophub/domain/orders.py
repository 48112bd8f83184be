# shophub/domain/orders.py
from datetime import date, datetime, timedelta
from enum import Enum

from shophub.utils.settings import ESTIMATED_DELIVERY_DAYS


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


#jedyne przejscia dostepne dla uzytkownika, reszta to operacje administracyjne
USER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CANCELLED},
}


def can_transition(current: str, target: OrderStatus) -> bool:
    return target in USER_TRANSITIONS.get(OrderStatus(current), set())


def order_number(order_id: int) -> str:
    return f"ORD-{order_id:06d}"


def estimated_delivery(created_at: datetime, days: int = ESTIMATED_DELIVERY_DAYS) -> date:
    return (created_at + timedelta(days=days)).date()
