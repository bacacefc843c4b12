"""
Tests for the transactional boundary around multi-step writes.
"""
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from conftest import stored_files

from arttouch_admin.database import Base
from arttouch_admin.errors import ConflictError, StorageError
from arttouch_admin.models.category import Category
from arttouch_admin.models.product import Product
from arttouch_admin.services.uow import unit_of_work


@pytest.fixture
def file_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'catalog.db'}", future=True)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


def test_commit_on_success(db):
    with unit_of_work(db):
        db.add(Category(name="Prints"))
    db.expire_all()
    assert db.query(Category).count() == 1


def test_rollback_removes_written_blobs(db, blobs, media_root):
    with pytest.raises(RuntimeError):
        with unit_of_work(db, blobs) as uow:
            db.add(Category(name="Prints"))
            uow.store_blob(b"data", "cover_1_abc.jpg")
            assert stored_files(media_root) == ["cover_1_abc.jpg"]
            raise RuntimeError("boom")
    assert db.query(Category).count() == 0
    assert stored_files(media_root) == []


def test_discarded_blobs_are_removed_only_after_commit(db, blobs, media_root):
    ref = blobs.store(b"old", "cover_1_old.jpg")

    with pytest.raises(RuntimeError):
        with unit_of_work(db, blobs) as uow:
            uow.discard_after_commit(ref)
            raise RuntimeError("boom")
    assert stored_files(media_root) == ["cover_1_old.jpg"]

    with unit_of_work(db, blobs) as uow:
        uow.discard_after_commit(ref)
    assert stored_files(media_root) == []


def test_blob_io_error_becomes_storage_error(db, failing_blobs):
    with pytest.raises(StorageError):
        with unit_of_work(db, failing_blobs(fail_on=1)) as uow:
            uow.store_blob(b"data", "x.jpg")


def test_without_blob_store_writes_fail_and_deletes_are_skipped(db):
    with pytest.raises(StorageError):
        with unit_of_work(db) as uow:
            uow.store_blob(b"data", "x.jpg")

    with unit_of_work(db) as uow:
        db.add(Category(name="Prints"))
        uow.discard_after_commit("/media/products/cover_1_old.jpg")
    assert db.query(Category).count() == 1


def test_database_error_becomes_storage_error(db):
    with pytest.raises(StorageError):
        with unit_of_work(db):
            # name is NOT NULL
            db.add(Category(name=None))


def test_concurrent_product_edit_is_a_conflict(file_engine):
    Session = sessionmaker(bind=file_engine, autoflush=False, future=True)
    setup = Session()
    category = Category(name="Prints")
    setup.add(category)
    setup.flush()
    setup.add(Product(name="Original", original_price=10, category_id=category.id))
    setup.commit()
    product_id = setup.query(Product.id).scalar()
    setup.close()

    first, second = Session(), Session()
    stale = first.get(Product, product_id)
    assert stale.version == 1

    fresh = second.get(Product, product_id)
    fresh.name = "Edited elsewhere"
    second.commit()
    second.close()

    with pytest.raises(ConflictError):
        with unit_of_work(first):
            stale.name = "Edited here"
            stale.updated_at = datetime.utcnow()

    first.expire_all()
    assert first.get(Product, product_id).name == "Edited elsewhere"
    first.close()
