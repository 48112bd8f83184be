# shophub/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from shophub.data.models.cart_line import CartLineModel
from shophub.data.models.order import OrderModel
from shophub.data.models.order_item import OrderItemModel
from shophub.domain.catalog import Page
from shophub.domain.errors import EmptyCart, InsufficientStock, InvalidState, NotFound
from shophub.domain.identity import Identity
from shophub.domain.orders import OrderStatus, can_transition, estimated_delivery, order_number
from shophub.domain.pricing import FREE_SHIPPING_THRESHOLD, STANDARD_SHIPPING_COST
from shophub.domain.schemas import ShippingAddress
from shophub.repos.cart_repo import CartRepo
from shophub.repos.catalog_repo import CatalogRepo
from shophub.repos.order_repo import OrderRepo
from shophub.services.cart_service import summarize
from shophub.services.notification_service import NotificationService
from shophub.utils.logging import get_logger
from shophub.utils.retry import db_retry

logger = get_logger(__name__)

SUMMARY_DELIVERY_DAYS = 5
RETURN_POLICY_DAYS = 30


def serialize_order(order: OrderModel, item_count: int) -> Dict[str, Any]:
    return {
        "id": order.id,
        "order_number": order_number(order.id),
        "user_id": order.user_id,
        "status": order.status,
        "total_amount": order.total_amount,
        "tax_amount": order.tax_amount,
        "shipping_amount": order.shipping_amount,
        #JSON -> typowany adres dopiero na granicy bazy
        "shipping_address": ShippingAddress.model_validate(order.shipping_address),
        "item_count": item_count,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def serialize_item(item: OrderItemModel) -> Dict[str, Any]:
    product = item.product
    category = product.category
    return {
        "id": item.id,
        "product_id": item.product_id,
        "quantity": item.quantity,
        #snapshot z chwili zakupu, nie products.price
        "price": item.price,
        "name": product.name,
        "description": product.description,
        "image_url": product.image_url,
        "brand": product.brand,
        "category_name": category.name if category else None,
        "category_slug": category.slug if category else None,
    }


class OrderService:
    """
    Checkout i cykl zycia zamowienia.

    checkout: koszyk -> zamowienie (pending) w jednej transakcji razem
    z pozycjami, zdjeciem stanow magazynowych i wyczyszczeniem koszyka.
    cancel: pending -> cancelled + zwrot stanow.
    """

    def __init__(self, db: Session, notifier: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.notifier = notifier or NotificationService()

    # =====================================================
    # QUERY
    # =====================================================
    def checkout_summary(self, identity: Identity) -> Dict[str, Any]:
        lines = [] if identity.is_guest else self.cart.get_lines(identity.user_id)
        return {
            "cart_summary": summarize(lines).as_dict(),
            "shipping_info": {
                "free_shipping_threshold": FREE_SHIPPING_THRESHOLD,
                "standard_shipping_cost": STANDARD_SHIPPING_COST,
                "estimated_delivery_days": SUMMARY_DELIVERY_DAYS,
                "return_policy_days": RETURN_POLICY_DAYS,
            },
        }

    def list_orders(self, identity: Identity, page: Page) -> Dict[str, Any]:
        user_id = identity.require_user()
        rows, total = self.repo.list_orders(user_id, page)
        return {
            "orders": [serialize_order(order, count) for order, count in rows],
            "pagination": page.describe(total, "orders"),
        }

    def get_order(self, identity: Identity, order_id: int) -> Dict[str, Any]:
        user_id = identity.require_user()

        order = self.repo.get_order(order_id, user_id)
        if not order:
            raise NotFound("Order not found")

        items = self.repo.get_items(order.id)
        return {
            "order": serialize_order(order, len(items)),
            "items": [serialize_item(item) for item in items],
            "order_number": order_number(order.id),
        }

    # =====================================================
    # COMMANDS
    # =====================================================
    def checkout(self, identity: Identity, shipping_address: ShippingAddress) -> Dict[str, Any]:
        user_id = identity.require_user("Please login to complete checkout")

        order, item_count = self._place_order(user_id, shipping_address)
        number = order_number(order.id)

        logger.info(
            f"Zamowienie {number} utworzone dla usera {user_id}, total {order.total_amount}",
            extra={"user_id": user_id, "order_id": order.id},
        )

        self.notifier.order_placed(user_id, order.id, number)

        return {
            "message": "Order placed successfully!",
            "order": serialize_order(order, item_count),
            "order_number": number,
            "estimated_delivery": estimated_delivery(order.created_at),
        }

    @db_retry()
    def _place_order(self, user_id: int, shipping_address: ShippingAddress):
        lines = self.cart.get_lines(user_id)
        if not lines:
            raise EmptyCart()

        #wstepna walidacja, bez zadnych zmian w bazie
        self._validate_stock(lines)

        summary = summarize(lines)
        wanted = [(line.product, line.quantity) for line in lines]
        now = datetime.now(timezone.utc)

        try:
            #zajecie dokladnie tych linii ktore przeczytalismy, rownolegly checkout
            #tego samego koszyka usunie 0 wierszy i nie zalozy drugiego zamowienia
            claimed = self.cart.delete_lines([line.id for line in lines])
            if claimed != len(lines):
                logger.warning(
                    f"Koszyk usera {user_id} zmienil sie w trakcie checkoutu "
                    f"(przeczytano {len(lines)} linii, usunieto {claimed}), rollback"
                )
                raise EmptyCart()

            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    total_amount=summary.total,
                    tax_amount=summary.tax_amount,
                    shipping_amount=summary.shipping_cost,
                    status=OrderStatus.PENDING.value,
                    shipping_address=shipping_address.model_dump(mode="json"),
                    created_at=now,
                    updated_at=now,
                )
            )

            for product, quantity in wanted:
                self.repo.add_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=product.id,
                        quantity=quantity,
                        price=product.price,
                    )
                )

                #wlasciwe sprawdzenie: warunkowy update w tej samej transakcji
                if not self.catalog.decrement_stock(product.id, quantity):
                    available = self.catalog.get_stock(product.id)
                    logger.warning(
                        f"Stan produktu {product.id} zmienil sie w trakcie checkoutu "
                        f"(potrzeba {quantity}, jest {available}), rollback"
                    )
                    raise InsufficientStock(product.name, available)

            self.repo.flush()
            self.repo.commit()

        except Exception:
            self.repo.rollback()
            raise

        return order, len(lines)

    def cancel(self, identity: Identity, order_id: int) -> Dict[str, Any]:
        user_id = identity.require_user()

        order = self._cancel_order(user_id, order_id)
        number = order_number(order.id)

        logger.info(f"Zamowienie {number} anulowane przez usera {user_id}", extra={"order_id": order.id})

        self.notifier.order_cancelled(user_id, order.id, number)

        return {"status": "success", "message": "Order cancelled successfully"}

    @db_retry()
    def _cancel_order(self, user_id: int, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id, user_id)
        if not order:
            raise NotFound("Order not found")

        if not can_transition(order.status, OrderStatus.CANCELLED):
            raise InvalidState("Only pending orders can be cancelled")

        try:
            #warunek na status chroni przed podwojnym zwrotem stanow
            rowcount = self.repo.update_status(
                order.id,
                old_status=OrderStatus.PENDING.value,
                new_status=OrderStatus.CANCELLED.value,
            )
            if rowcount == 0:
                raise InvalidState("Only pending orders can be cancelled")

            for item in self.repo.get_items(order.id):
                self.catalog.restore_stock(item.product_id, item.quantity)

            self.repo.commit()

        except Exception:
            self.repo.rollback()
            raise

        return order

    @staticmethod
    def _validate_stock(lines: List[CartLineModel]) -> None:
        for line in lines:
            if line.quantity > line.product.stock:
                raise InsufficientStock(line.product.name, line.product.stock)
