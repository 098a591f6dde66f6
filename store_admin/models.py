import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, Text, Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON
from .db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Store(Base):
    __tablename__ = "stores"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    user_id = Column(String, index=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)


class Billboard(Base):
    __tablename__ = "billboards"

    id = Column(String, primary_key=True, default=_new_id)
    store_id = Column(String, ForeignKey("stores.id"), index=True, nullable=False)
    label = Column(String, nullable=False)
    label_en = Column(String, nullable=False)
    image_url = Column(Text, nullable=False)
    is_billboard_active = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)


class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, default=_new_id)
    store_id = Column(String, ForeignKey("stores.id"), index=True, nullable=False)
    billboard_id = Column(String, ForeignKey("billboards.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    name_en = Column(String, nullable=True)
    category_description = Column(Text, nullable=True)
    category_description_en = Column(Text, nullable=True)
    category_type = Column(String, nullable=True)

    # ordered list[{"fieldName", "fieldType", "options"}], stored verbatim
    fields = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    billboard = relationship("Billboard", lazy="joined")


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=_new_id)
    store_id = Column(String, ForeignKey("stores.id"), index=True, nullable=False)
    category_id = Column(String, ForeignKey("categories.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    product_description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    category = relationship("Category")
    images = relationship(
        "Image",
        order_by="Image.position",
        cascade="all, delete-orphan",
    )


class Image(Base):
    __tablename__ = "product_images"

    id = Column(String, primary_key=True, default=_new_id)
    product_id = Column(String, ForeignKey("products.id"), index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    url = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
