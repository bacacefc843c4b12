from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from arttouch_admin.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(2000))
    original_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    discount_price = Column(Numeric(10, 2, asdecimal=False))
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_new_arrival = Column(Boolean, default=False, nullable=False)
    is_bestseller = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    # Optimistic concurrency token, bumped by SQLAlchemy on every UPDATE
    version = Column(Integer, nullable=False)

    category = relationship("Category", back_populates="products")
    # Sizes and images are removed explicitly by the product service, never by cascade
    sizes = relationship("ProductSize", back_populates="product", order_by="ProductSize.id")
    images = relationship("ProductImage", back_populates="product", order_by="ProductImage.id")

    __mapper_args__ = {"version_id_col": version}

    @property
    def cover_image(self):
        return next((img for img in self.images if img.is_cover), None)


class ProductSize(Base):
    __tablename__ = "product_sizes"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    size = Column(String(50), nullable=False)
    quantity_in_stock = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="sizes")


class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    image_url = Column(String(500), nullable=False)
    is_cover = Column(Boolean, default=False, nullable=False)

    product = relationship("Product", back_populates="images")
