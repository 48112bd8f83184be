# shophub/repos/order_repo.py
from typing import List, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, joinedload

from shophub.data.models.order import OrderModel
from shophub.data.models.order_item import OrderItemModel
from shophub.data.models.product import ProductModel
from shophub.domain.catalog import Page


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #flush zeby dostac id, commit robi serwis po calej transakcji
        self.db.add(order)
        self.db.flush()
        return order

    def add_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        return item

    def get_order(self, order_id: int, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_items(self, order_id: int) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .options(joinedload(OrderItemModel.product).joinedload(ProductModel.category))
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id.asc())
            ).scalars().all()
        )

    def list_orders(self, user_id: int, page: Page) -> Tuple[List[Tuple[OrderModel, int]], int]:
        total = self.db.execute(
            select(func.count(OrderModel.id)).where(OrderModel.user_id == user_id)
        ).scalar_one()

        rows = self.db.execute(
            select(OrderModel, func.count(OrderItemModel.id))
            .outerjoin(OrderItemModel, OrderItemModel.order_id == OrderModel.id)
            .where(OrderModel.user_id == user_id)
            .group_by(OrderModel.id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        ).all()

        return [(order, count) for order, count in rows], total

    def update_status(self, order_id: int, old_status: str, new_status: str) -> int:
        """
        Warunkowa zmiana statusu, np.
        update orders set status='cancelled' where id=1 and status='pending'
        0 = ktos juz zmienil status.
        """
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == old_status)
            .values(status=new_status)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def flush(self):
        self.db.flush()
