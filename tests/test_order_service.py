from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from shophub.data.database import create_db_engine, create_session_factory, init_db
from shophub.data.models import CartLineModel, OrderItemModel, OrderModel, ProductModel
from shophub.domain.catalog import Page
from shophub.domain.errors import EmptyCart, InsufficientStock, InvalidState, NotFound, Unauthorized
from shophub.domain.identity import GUEST, Identity
from shophub.repos.cart_repo import CartRepo
from shophub.services.order_service import OrderService

from conftest import FakeNotifier, address, make_user, put_in_cart, seed_catalog, stock_of


def count(db, model, *where):
    return db.execute(select(func.count(model.id)).where(*where)).scalar_one()


@pytest.fixture
def service(db, notifier):
    return OrderService(db, notifier)


def test_checkout_places_order(db, service, notifier, products, alice, alice_id):
    put_in_cart(db, alice, products["widget"], 2)

    result = service.checkout(alice_id, address())

    order = result["order"]
    assert result["order_number"] == "ORD-000001"
    assert result["message"] == "Order placed successfully!"
    assert order["status"] == "pending"
    assert order["total_amount"] == Decimal("64.80")
    assert order["tax_amount"] == Decimal("4.80")
    assert order["shipping_amount"] == Decimal("0.00")
    assert order["item_count"] == 1
    assert order["shipping_address"].city == "Springfield"
    assert result["estimated_delivery"] == (order["created_at"] + timedelta(days=7)).date()

    assert stock_of(db, products["widget"]) == 8
    assert count(db, CartLineModel, CartLineModel.user_id == alice.id) == 0
    assert notifier.events == [("placed", alice.id, order["id"], "ORD-000001")]


def test_checkout_snapshots_item_prices(db, service, products, alice, alice_id):
    put_in_cart(db, alice, products["widget"], 1)
    put_in_cart(db, alice, products["gadget"], 2)

    order_id = service.checkout(alice_id, address())["order"]["id"]

    products["widget"].price = Decimal("99.00")
    db.commit()

    detail = service.get_order(alice_id, order_id)
    prices = {item["name"]: item["price"] for item in detail["items"]}
    assert prices == {"Widget": Decimal("30.00"), "Gadget": Decimal("10.00")}
    assert detail["order"]["total_amount"] == Decimal("59.99")


def test_small_order_pays_shipping(db, service, products, alice, alice_id):
    put_in_cart(db, alice, products["gadget"], 2)

    order = service.checkout(alice_id, address())["order"]

    assert order["shipping_amount"] == Decimal("5.99")
    assert order["total_amount"] == Decimal("27.59")


def test_checkout_empty_cart(db, service, notifier, products, alice_id):
    with pytest.raises(EmptyCart):
        service.checkout(alice_id, address())

    assert count(db, OrderModel) == 0
    assert notifier.events == []


def test_checkout_requires_login(service, products):
    with pytest.raises(Unauthorized):
        service.checkout(GUEST, address())


def test_checkout_over_stock_changes_nothing(db, service, notifier, products, alice, alice_id):
    put_in_cart(db, alice, products["widget"], 1)
    put_in_cart(db, alice, products["gadget"], 5)

    with pytest.raises(InsufficientStock) as exc:
        service.checkout(alice_id, address())

    assert exc.value.product_name == "Gadget"
    assert exc.value.available == 3
    assert count(db, OrderModel) == 0
    assert stock_of(db, products["widget"]) == 10
    assert stock_of(db, products["gadget"]) == 3
    assert count(db, CartLineModel, CartLineModel.user_id == alice.id) == 2
    assert notifier.events == []


def test_stock_guard_inside_transaction(db, service, products, alice, alice_id, monkeypatch):
    #bez wstepnej walidacji ostatnia linia ma zablokowac caly checkout
    monkeypatch.setattr(OrderService, "_validate_stock", staticmethod(lambda lines: None))
    put_in_cart(db, alice, products["widget"], 2)
    put_in_cart(db, alice, products["lantern"], 3)

    with pytest.raises(InsufficientStock):
        service.checkout(alice_id, address())

    assert count(db, OrderModel) == 0
    assert count(db, OrderItemModel) == 0
    assert stock_of(db, products["widget"]) == 10
    assert stock_of(db, products["lantern"]) == 1
    assert count(db, CartLineModel, CartLineModel.user_id == alice.id) == 2


def test_concurrent_checkout_of_last_item(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'race.db'}")
    init_db(engine)
    factory = create_session_factory(engine)

    with factory() as setup:
        products = seed_catalog(setup)
        alice = make_user(setup, "alice")
        bob = make_user(setup, "bob")
        put_in_cart(setup, alice, products["lantern"], 1)
        put_in_cart(setup, bob, products["lantern"], 1)
        lantern_id = products["lantern"].id

    session_a = factory()
    session_b = factory()
    try:
        #sesja B widzi jeszcze stan 1, wiec wstepna walidacja przejdzie
        assert session_b.get(ProductModel, lantern_id).stock == 1

        OrderService(session_a, FakeNotifier()).checkout(Identity(alice.id), address())

        with pytest.raises(InsufficientStock) as exc:
            OrderService(session_b, FakeNotifier()).checkout(Identity(bob.id), address())
        assert exc.value.available == 0

        with factory() as check:
            assert check.get(ProductModel, lantern_id).stock == 0
            assert count(check, OrderModel, OrderModel.user_id == alice.id) == 1
            assert count(check, OrderModel, OrderModel.user_id == bob.id) == 0
            assert count(check, CartLineModel, CartLineModel.user_id == bob.id) == 1
    finally:
        session_a.close()
        session_b.close()
        engine.dispose()


def test_checkout_retries_transient_errors(db, service, products, alice, alice_id, monkeypatch):
    put_in_cart(db, alice, products["widget"], 1)

    original = CartRepo.get_lines
    calls = []

    def flaky(self, user_id):
        calls.append(user_id)
        if len(calls) == 1:
            raise OperationalError("SELECT", {}, Exception("deadlock detected"))
        return original(self, user_id)

    monkeypatch.setattr(CartRepo, "get_lines", flaky)

    result = service.checkout(alice_id, address())

    assert len(calls) == 2
    assert result["order"]["item_count"] == 1
    assert count(db, OrderModel) == 1


def test_cancel_restores_stock(db, service, notifier, products, alice, alice_id):
    put_in_cart(db, alice, products["widget"], 2)
    put_in_cart(db, alice, products["novel"], 3)
    order_id = service.checkout(alice_id, address())["order"]["id"]

    result = service.cancel(alice_id, order_id)

    assert result == {"status": "success", "message": "Order cancelled successfully"}
    assert stock_of(db, products["widget"]) == 10
    assert stock_of(db, products["novel"]) == 20
    assert service.get_order(alice_id, order_id)["order"]["status"] == "cancelled"
    assert notifier.events[-1] == ("cancelled", alice.id, order_id, "ORD-000001")


def test_cancel_twice(db, service, products, alice, alice_id):
    put_in_cart(db, alice, products["widget"], 2)
    order_id = service.checkout(alice_id, address())["order"]["id"]
    service.cancel(alice_id, order_id)

    with pytest.raises(InvalidState):
        service.cancel(alice_id, order_id)

    assert stock_of(db, products["widget"]) == 10


def test_cancel_shipped_order(db, service, products, alice, alice_id):
    put_in_cart(db, alice, products["widget"], 1)
    order_id = service.checkout(alice_id, address())["order"]["id"]
    db.get(OrderModel, order_id).status = "shipped"
    db.commit()

    with pytest.raises(InvalidState):
        service.cancel(alice_id, order_id)

    assert stock_of(db, products["widget"]) == 9


def test_orders_are_private(db, service, products, alice, alice_id, bob_id):
    put_in_cart(db, alice, products["widget"], 1)
    order_id = service.checkout(alice_id, address())["order"]["id"]

    with pytest.raises(NotFound):
        service.get_order(bob_id, order_id)
    with pytest.raises(NotFound):
        service.cancel(bob_id, order_id)

    assert service.list_orders(bob_id, Page())["orders"] == []


def test_list_orders_paginates(db, service, products, alice, alice_id):
    for _ in range(3):
        put_in_cart(db, alice, products["novel"], 1)
        service.checkout(alice_id, address())

    first = service.list_orders(alice_id, Page(page=1, page_size=2))
    second = service.list_orders(alice_id, Page(page=2, page_size=2))

    assert [o["order_number"] for o in first["orders"]] == ["ORD-000003", "ORD-000002"]
    assert [o["order_number"] for o in second["orders"]] == ["ORD-000001"]
    assert first["pagination"]["total_orders"] == 3
    assert first["pagination"]["total_pages"] == 2
    assert first["pagination"]["has_next"] is True
    assert second["pagination"]["has_prev"] is True
    assert first["orders"][0]["item_count"] == 1


def test_checkout_summary_for_guest(service, products):
    summary = service.checkout_summary(GUEST)

    assert summary["cart_summary"]["item_count"] == 0
    assert summary["shipping_info"]["free_shipping_threshold"] == Decimal("50.00")
    assert summary["shipping_info"]["return_policy_days"] == 30


def test_double_submit_of_one_cart_creates_one_order(tmp_path, monkeypatch):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'double.db'}")
    init_db(engine)
    factory = create_session_factory(engine)

    with factory() as setup:
        products = seed_catalog(setup)
        alice = make_user(setup, "alice")
        put_in_cart(setup, alice, products["novel"], 2)
        novel_id = products["novel"].id

    session_a = factory()
    session_b = factory()
    try:
        #druga prosba przeczytala koszyk zanim pierwsza zrobila commit
        stale_lines = CartRepo(session_b).get_lines(alice.id)

        OrderService(session_a, FakeNotifier()).checkout(Identity(alice.id), address())

        monkeypatch.setattr(CartRepo, "get_lines", lambda self, user_id: stale_lines)
        notifier = FakeNotifier()
        with pytest.raises(EmptyCart):
            OrderService(session_b, notifier).checkout(Identity(alice.id), address())
        assert notifier.events == []

        with factory() as check:
            assert count(check, OrderModel, OrderModel.user_id == alice.id) == 1
            assert count(check, OrderItemModel) == 1
            assert check.get(ProductModel, novel_id).stock == 18
    finally:
        session_a.close()
        session_b.close()
        engine.dispose()


def test_checkout_removes_only_lines_it_read(db, service, products, alice, alice_id, monkeypatch):
    put_in_cart(db, alice, products["widget"], 1)
    read = CartRepo(db).get_lines(alice.id)

    #linia dodana po odczycie koszyka zostaje na nastepne zamowienie
    put_in_cart(db, alice, products["novel"], 1)
    monkeypatch.setattr(CartRepo, "get_lines", lambda self, user_id: read)

    order = service.checkout(alice_id, address())["order"]

    assert order["item_count"] == 1
    remaining = db.execute(select(CartLineModel.product_id).where(CartLineModel.user_id == alice.id)).scalars().all()
    assert remaining == [products["novel"].id]
