# shophub/services/cart_service.py
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shophub.data.models.cart_line import CartLineModel
from shophub.domain.errors import InsufficientStock, NotFound, ValidationFailed
from shophub.domain.identity import Identity
from shophub.domain.pricing import compute_summary, to_money
from shophub.repos.cart_repo import CartRepo
from shophub.repos.catalog_repo import CatalogRepo
from shophub.utils.logging import get_logger

logger = get_logger(__name__)

GUEST_CART_MESSAGE = "Please login to add items to cart"


def serialize_line(line: CartLineModel) -> Dict[str, Any]:
    product = line.product
    category = product.category
    return {
        "line_id": line.id,
        "product_id": product.id,
        "quantity": line.quantity,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "image_url": product.image_url,
        "stock": product.stock,
        "brand": product.brand,
        "category_name": category.name if category else None,
        "category_slug": category.slug if category else None,
        "line_total": to_money(product.price * line.quantity),
        "added_at": line.created_at,
    }


def summarize(lines: List[CartLineModel]):
    #zawsze aktualna cena produktu, koszyk nie trzyma snapshotu ceny
    return compute_summary((line.product.price, line.quantity) for line in lines)


class CartService:
    """
    Koszyk zalogowanego uzytkownika.
    query (get_cart, get_summary) tylko odczyt,
    commands (add_line, update_line, remove_line, clear) modyfikuja stan.
    Gosc widzi pusty koszyk, kazda modyfikacja -> Unauthorized.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)

    #query
    def get_cart(self, identity: Identity) -> Dict[str, Any]:
        lines = [] if identity.is_guest else self.repo.get_lines(identity.user_id)

        return {
            "items": [serialize_line(line) for line in lines],
            "summary": summarize(lines).as_dict(),
        }

    def get_summary(self, identity: Identity) -> Dict[str, Any]:
        lines = [] if identity.is_guest else self.repo.get_lines(identity.user_id)
        return summarize(lines).as_dict()

    #commands
    def add_line(self, identity: Identity, product_id: int, quantity: int) -> Dict[str, Any]:
        user_id = identity.require_user(GUEST_CART_MESSAGE)
        _check_quantity(quantity)

        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        if quantity > product.stock:
            raise InsufficientStock(
                product.name,
                product.stock,
                f"Insufficient stock. Only {product.stock} items available.",
            )

        existing = self.repo.get_line_by_product(user_id, product_id)

        if existing is None:
            logger.info(f"Dodaje produkt {product_id} (x{quantity}) do koszyka usera {user_id}")
            try:
                line = self.repo.add_line(
                    CartLineModel(user_id=user_id, product_id=product_id, quantity=quantity)
                )
                self.repo.commit()
            except IntegrityError:
                #rownolegle dodanie tego samego produktu wygralo wyscig o u_cart_user_product,
                #scalamy z linia ktora juz jest w bazie
                self.repo.rollback()
                existing = self.repo.get_line_by_product(user_id, product_id)
                if existing is None:
                    raise
            except Exception:
                self.repo.rollback()
                raise
            else:
                return self._line_result(user_id, line.id, created=True)

        new_quantity = existing.quantity + quantity
        if new_quantity > product.stock:
            raise InsufficientStock(
                product.name,
                product.stock,
                f"Cannot add {quantity} more items. Total quantity would exceed available stock.",
            )
        logger.info(
            f"Produkt {product_id} juz jest w koszyku usera {user_id}, zwiekszam ilosc "
            f"z {existing.quantity} do {new_quantity}"
        )
        existing.quantity = new_quantity

        try:
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return self._line_result(user_id, existing.id, created=False)

    def _line_result(self, user_id: int, line_id: int, created: bool) -> Dict[str, Any]:
        line = self.repo.get_line(user_id, line_id)
        return {
            "created": created,
            "message": "Item added to cart successfully" if created else "Cart item quantity updated",
            "cart_item": serialize_line(line),
        }

    def update_line(self, identity: Identity, line_id: int, quantity: int) -> Dict[str, Any]:
        user_id = identity.require_user()
        _check_quantity(quantity)

        line = self.repo.get_line(user_id, line_id)
        if not line:
            raise NotFound("Cart item not found")

        if quantity > line.product.stock:
            raise InsufficientStock(
                line.product.name,
                line.product.stock,
                f"Cannot update quantity. Only {line.product.stock} items available.",
            )

        line.quantity = quantity
        self.repo.commit()

        logger.info(f"Linia {line_id} koszyka usera {user_id}: nowa ilosc {quantity}")

        return {
            "message": "Cart item updated successfully",
            "cart_item": serialize_line(self.repo.get_line(user_id, line_id)),
        }

    def remove_line(self, identity: Identity, line_id: int) -> None:
        user_id = identity.require_user()

        line = self.repo.get_line(user_id, line_id)
        if not line:
            raise NotFound("Cart item not found")

        self.repo.delete_line(line)
        self.repo.commit()

        logger.info(f"Usunieto linie {line_id} z koszyka usera {user_id}")

    def clear(self, identity: Identity) -> int:
        user_id = identity.require_user()

        removed = self.repo.clear(user_id)
        self.repo.commit()

        logger.info(f"Wyczyszczono koszyk usera {user_id}, usunieto {removed} linii")
        return removed


def _check_quantity(quantity: int) -> None:
    if quantity < 1:
        raise ValidationFailed(
            "Quantity must be at least 1",
            [{"field": "quantity", "msg": "Quantity must be at least 1"}],
        )
