# shophub/api/routers/checkout.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shophub.api.deps import get_identity, get_notifier
from shophub.data.database import get_db
from shophub.domain.catalog import Page
from shophub.domain.identity import Identity
from shophub.domain.schemas import (
    CheckoutIn,
    CheckoutOut,
    CheckoutSummaryOut,
    MessageOut,
    OrderDetailOut,
    OrderListOut,
)
from shophub.services.notification_service import NotificationService
from shophub.services.order_service import OrderService

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


def get_service(db: Session = Depends(get_db), notifier: NotificationService = Depends(get_notifier)):
    return OrderService(db, notifier=notifier)


@router.post("/process", response_model=CheckoutOut, status_code=201)
def process_checkout(
    payload: CheckoutIn,
    identity: Identity = Depends(get_identity),
    svc: OrderService = Depends(get_service),
):
    """
    Tworzy zamowienie z koszyka zalogowanego uzytkownika.
    Powiadomienie idzie asynchronicznie po commicie.
    """
    return svc.checkout(identity, payload.shipping_address)


@router.get("/summary", response_model=CheckoutSummaryOut)
def checkout_summary(identity: Identity = Depends(get_identity), svc: OrderService = Depends(get_service)):
    return svc.checkout_summary(identity)


@router.get("/orders", response_model=OrderListOut)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    identity: Identity = Depends(get_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(identity, Page(page, limit))


@router.get("/orders/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    identity: Identity = Depends(get_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.get_order(identity, order_id)


@router.put("/orders/{order_id}/cancel", response_model=MessageOut)
def cancel_order(
    order_id: int,
    identity: Identity = Depends(get_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.cancel(identity, order_id)
