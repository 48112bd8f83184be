from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from shophub.api.deps import get_notifier
from shophub.data.database import create_db_engine, create_session_factory, init_db
from shophub.data.models import CartLineModel, CategoryModel, ProductModel, UserModel
from shophub.domain.identity import Identity
from shophub.main import create_app
from shophub.services.auth_service import create_token, hash_password

PASSWORD = "Secret123"


class FakeNotifier:
    def __init__(self):
        self.events = []

    def order_placed(self, user_id, order_id, order_number):
        self.events.append(("placed", user_id, order_id, order_number))

    def order_cancelled(self, user_id, order_id, order_number):
        self.events.append(("cancelled", user_id, order_id, order_number))


def seed_catalog(db):
    gear = CategoryModel(name="Gear", slug="gear", description="Outdoor gear", icon="G", color="primary")
    books = CategoryModel(name="Books", slug="books", description="Paper and ink", icon="B", color="warning")
    db.add_all([gear, books])
    db.flush()

    products = {
        "widget": ProductModel(
            name="Widget", description="A sturdy widget", price=Decimal("30.00"),
            category_id=gear.id, rating=Decimal("4.50"), stock=10, brand="Acme",
            features=["Steel", "Waterproof"],
        ),
        "gadget": ProductModel(
            name="Gadget", description="Pocket gadget", price=Decimal("10.00"),
            category_id=gear.id, rating=Decimal("4.80"), stock=3, brand="Globex",
        ),
        "lantern": ProductModel(
            name="Lantern", description="Camping lantern", price=Decimal("25.00"),
            category_id=gear.id, rating=Decimal("3.90"), stock=1, brand="Acme",
        ),
        "tent": ProductModel(
            name="Tent", description="Two person tent", price=Decimal("120.00"),
            category_id=gear.id, rating=Decimal("5.00"), stock=0, brand="Initech",
        ),
        "novel": ProductModel(
            name="Novel", description="A long story", price=Decimal("12.50"),
            category_id=books.id, rating=Decimal("4.10"), stock=20, brand="Penguin",
        ),
        "orphan": ProductModel(
            name="Orphan Item", description="No category", price=Decimal("5.00"),
            category_id=None, rating=Decimal("2.00"), stock=5, brand=None,
        ),
    }
    db.add_all(products.values())
    db.commit()
    return products


def make_user(db, username="alice", email=None):
    user = UserModel(
        username=username,
        email=email or f"{username}@example.com",
        password_hash=hash_password(PASSWORD),
        first_name=username.title(),
    )
    db.add(user)
    db.commit()
    return user


def put_in_cart(db, user, product, quantity):
    #bezposrednio w tabeli, z pominieciem walidacji stanu
    line = CartLineModel(user_id=user.id, product_id=product.id, quantity=quantity)
    db.add(line)
    db.commit()
    return line


def stock_of(db, product):
    return db.execute(select(ProductModel.stock).where(ProductModel.id == product.id)).scalar_one()


def address(**overrides):
    from shophub.domain.schemas import ShippingAddress

    data = {
        "first_name": "Alice",
        "last_name": "Smith",
        "email": "alice@example.com",
        "address": "1 Main St",
        "city": "Springfield",
        "zip_code": "12345",
        "country": "US",
    }
    data.update(overrides)
    return ShippingAddress(**data)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def products(db):
    return seed_catalog(db)


@pytest.fixture
def alice(db):
    return make_user(db, "alice")


@pytest.fixture
def bob(db):
    return make_user(db, "bob")


@pytest.fixture
def alice_id(alice):
    return Identity(user_id=alice.id)


@pytest.fixture
def bob_id(bob):
    return Identity(user_id=bob.id)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def app(engine, notifier):
    app = create_app(engine=engine, seed_data=False)
    app.dependency_overrides[get_notifier] = lambda: notifier
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(alice):
    return {"Authorization": f"Bearer {create_token(alice.id)}"}
