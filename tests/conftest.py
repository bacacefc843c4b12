"""
Shared fixtures for the admin back-office tests.

Every test gets a fresh in-memory SQLite schema and a blob store rooted in
its own temporary directory.
"""
import os
import tempfile
from datetime import datetime

# Settings are read on first import of arttouch_admin.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="arttouch-media-"))
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "s3cret"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from arttouch_admin.database import Base
from arttouch_admin.models.category import Category
from arttouch_admin.models.order import Order, OrderItem
from arttouch_admin.models.product import Product
from arttouch_admin.models.user import User
from arttouch_admin.schemas.product import ProductDraft, SizeDraft
from arttouch_admin.services import products as product_service
from arttouch_admin.utils.storage import ImageUpload, LocalBlobStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)()
    yield session
    session.close()


@pytest.fixture
def media_root(tmp_path):
    return tmp_path / "media"


@pytest.fixture
def blobs(media_root):
    return LocalBlobStore(media_root)


class FailingBlobStore(LocalBlobStore):
    """Blob store whose ``fail_on``-th write (1-based) raises OSError."""

    def __init__(self, root, fail_on: int = 1):
        super().__init__(root)
        self.fail_on = fail_on
        self.writes = 0

    def store(self, data, suggested_name):
        self.writes += 1
        if self.writes == self.fail_on:
            raise OSError("disk full")
        return super().store(data, suggested_name)


@pytest.fixture
def failing_blobs(media_root):
    def factory(fail_on: int = 1):
        return FailingBlobStore(media_root, fail_on=fail_on)
    return factory


def image(name: str = "photo.jpg", content: bytes = b"\x89fake-image-bytes") -> ImageUpload:
    return ImageUpload(filename=name, content=content)


def sizes(*pairs):
    return [SizeDraft(size=s, quantity_in_stock=q) for s, q in pairs]


def stored_files(root):
    if not root.exists():
        return []
    return sorted(p.name for p in root.rglob("*") if p.is_file())


@pytest.fixture
def make_category(db):
    def factory(name: str = "Paintings", is_active: bool = True) -> Category:
        category = Category(name=name, is_active=is_active)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category
    return factory


@pytest.fixture
def draft(make_category):
    """Factory for valid product drafts bound to a fresh category."""
    state = {}

    def factory(**overrides) -> ProductDraft:
        if "category_id" not in overrides:
            if "category" not in state:
                state["category"] = make_category()
            overrides["category_id"] = state["category"].id
        values = dict(
            name="Sunset over the Nile",
            description="Oil on canvas",
            original_price=120.0,
            discount_price=99.5,
            is_active=True,
            is_new_arrival=True,
            is_bestseller=False,
        )
        values.update(overrides)
        return ProductDraft(**values)
    return factory


@pytest.fixture
def make_product(db, blobs, draft):
    """Create a product through the write service and return it."""
    def factory(size_pairs=(("S", 1), ("M", 2)), cover=True, additional=1, **overrides) -> Product:
        result = product_service.create_product(
            db,
            blobs,
            draft(**overrides),
            cover_image=image("cover.jpg") if cover else None,
            additional_images=[image(f"extra{i}.png") for i in range(additional)],
            sizes=sizes(*size_pairs),
        )
        assert result.ok, result.message
        return result.payload
    return factory


@pytest.fixture
def make_user(db):
    def factory(email: str = "customer@example.com", first_name: str = "Mona", last_name: str = "Adel") -> User:
        user = User(email=email, first_name=first_name, last_name=last_name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return factory


@pytest.fixture
def make_order(db, make_user):
    state = {}

    def factory(status: str = "PENDING", total: float = 100.0, order_date: datetime = None, product: Product = None) -> Order:
        if "user" not in state:
            state["user"] = make_user()
        order = Order(
            user_id=state["user"].id,
            status=status,
            total_amount=total,
            order_date=order_date or datetime.utcnow(),
            shipping_address="12 Tahrir St, Cairo",
        )
        db.add(order)
        db.flush()
        if product is not None:
            db.add(OrderItem(order_id=order.id, product_id=product.id, quantity=1, size="M", price=total))
        db.commit()
        db.refresh(order)
        return order
    return factory


def count(db, model) -> int:
    return db.query(model).count()
