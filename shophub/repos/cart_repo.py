# shophub/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from shophub.data.models.cart_line import CartLineModel
from shophub.data.models.product import ProductModel


class CartRepo:
    """
    Dostep do tabeli cart. Zapisy robia tylko flush, commit/rollback
    wola serwis, bo linie koszyka sa tez czescia transakcji checkoutu.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_lines(self, user_id: int) -> List[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel)
                .options(joinedload(CartLineModel.product).joinedload(ProductModel.category))
                .where(CartLineModel.user_id == user_id)
                .order_by(CartLineModel.created_at.desc(), CartLineModel.id.desc())
            ).scalars().all()
        )

    def get_line(self, user_id: int, line_id: int) -> CartLineModel | None:
        #linia innego usera traktowana jak nieistniejaca
        return self.db.execute(
            select(CartLineModel)
            .options(joinedload(CartLineModel.product).joinedload(ProductModel.category))
            .where(CartLineModel.id == line_id, CartLineModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_line_by_product(self, user_id: int, product_id: int) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.user_id == user_id,
                CartLineModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_line(self, line: CartLineModel) -> None:
        self.db.delete(line)
        self.db.flush()

    def delete_lines(self, line_ids: List[int]) -> int:
        """
        delete from cart where id in (:ids)
        Zwraca ile linii faktycznie usunieto, mniej niz len(line_ids) = ktos je juz zabral.
        """
        if not line_ids:
            return 0
        result = self.db.execute(
            delete(CartLineModel)
            .where(CartLineModel.id.in_(line_ids))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartLineModel)
            .where(CartLineModel.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
