# shophub/api/routers/cart.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from shophub.api.deps import get_identity
from shophub.data.database import get_db
from shophub.domain.identity import Identity
from shophub.domain.schemas import (
    CartAddIn,
    CartLineResultOut,
    CartOut,
    CartSummaryOut,
    MessageOut,
    QuantityIn,
)
from shophub.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return get_service(db).get_cart(identity)


@router.get("/summary", response_model=CartSummaryOut)
def cart_summary(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return get_service(db).get_summary(identity)


@router.post("/add", response_model=CartLineResultOut, responses={201: {"model": CartLineResultOut}})
def add_item(
    payload: CartAddIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = get_service(db).add_line(identity, payload.product_id, payload.quantity)
    body = CartLineResultOut(message=result["message"], cart_item=result["cart_item"])
    #201 dla nowej linii, 200 gdy zwiekszono ilosc istniejacej
    return JSONResponse(
        status_code=201 if result["created"] else 200,
        content=body.model_dump(mode="json"),
    )


@router.put("/update/{line_id}", response_model=CartLineResultOut)
def update_item(
    line_id: int,
    payload: QuantityIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return get_service(db).update_line(identity, line_id, payload.quantity)


@router.delete("/remove/{line_id}", response_model=MessageOut)
def remove_item(
    line_id: int,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    get_service(db).remove_line(identity, line_id)
    return MessageOut(message="Item removed from cart successfully")


@router.delete("/clear", response_model=MessageOut)
def clear_cart(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    get_service(db).clear(identity)
    return MessageOut(message="Cart cleared successfully")
