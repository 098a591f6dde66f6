import math
from datetime import datetime, timezone
from typing import Annotated, Any, Optional, List, Literal
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ConfigDict, StrictBool, field_validator, model_validator
from pydantic.alias_generators import to_camel

FieldType = Literal["text", "number", "dropdown"]
FIELD_TYPES = ("text", "number", "dropdown")


class ApiModel(BaseModel):
    # python attributes stay snake_case, the wire format is camelCase
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _non_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be empty")
    return value


def _flag_default(value: Any) -> Any:
    return False if value is None else value


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they are always written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


# ---------------------------------------------------------
# Category field definitions
# ---------------------------------------------------------
class FieldDefinition(ApiModel):
    field_name: str
    field_type: FieldType = "text"
    options: List[str] = []

    @field_validator("field_name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _non_blank(v)

    @model_validator(mode="after")
    def _drop_unused_options(self):
        if self.field_type != "dropdown":
            self.options = []
        return self


# ---------------------------------------------------------
# Request payloads
# ---------------------------------------------------------
class StoreIn(ApiModel):
    name: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _non_blank(v)


class BillboardIn(ApiModel):
    label: str
    label_en: str
    image_url: str
    is_billboard_active: StrictBool = False

    @field_validator("is_billboard_active", mode="before")
    @classmethod
    def _default_flag(cls, v: Any) -> Any:
        return _flag_default(v)

    @field_validator("label", "label_en")
    @classmethod
    def _check_labels(cls, v: str) -> str:
        return _non_blank(v)

    @field_validator("image_url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("must be a valid http(s) URL")
        return v.strip()


class CategoryIn(ApiModel):
    name: str
    billboard_id: str
    name_en: Optional[str] = None
    category_description: Optional[str] = None
    category_description_en: Optional[str] = None
    category_type: Optional[str] = None
    fields: List[FieldDefinition] = []

    @field_validator("name", "billboard_id")
    @classmethod
    def _check_required(cls, v: str) -> str:
        return _non_blank(v)


class ImageIn(ApiModel):
    url: str

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        return _non_blank(v)


class ProductIn(ApiModel):
    name: str
    price: float
    category_id: str
    images: List[ImageIn]
    is_featured: StrictBool = False
    is_archived: StrictBool = False
    product_description: Optional[str] = None

    @field_validator("name", "category_id")
    @classmethod
    def _check_required(cls, v: str) -> str:
        return _non_blank(v)

    @field_validator("is_featured", "is_archived", mode="before")
    @classmethod
    def _default_flags(cls, v: Any) -> Any:
        return _flag_default(v)

    @field_validator("price", mode="before")
    @classmethod
    def _reject_bool_price(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v

    @field_validator("price")
    @classmethod
    def _check_price(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("must be a non-negative number")
        return v

    @field_validator("images")
    @classmethod
    def _check_images(cls, v: List[ImageIn]) -> List[ImageIn]:
        if not v:
            raise ValueError("must contain at least one image")
        return v


# ---------------------------------------------------------
# Responses
# ---------------------------------------------------------
class StoreOut(ApiModel):
    id: str
    name: str
    user_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class BillboardOut(ApiModel):
    id: str
    store_id: str
    label: str
    label_en: str
    image_url: str
    is_billboard_active: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime


class CategoryOut(ApiModel):
    id: str
    store_id: str
    billboard_id: str
    name: str
    name_en: Optional[str] = None
    category_description: Optional[str] = None
    category_description_en: Optional[str] = None
    category_type: Optional[str] = None
    fields: List[FieldDefinition] = []
    billboard: Optional[BillboardOut] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ImageOut(ApiModel):
    id: str
    url: str


class ProductOut(ApiModel):
    id: str
    store_id: str
    category_id: str
    name: str
    price: float
    is_featured: bool
    is_archived: bool
    product_description: Optional[str] = None
    images: List[ImageOut] = []
    category: Optional[CategoryOut] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
