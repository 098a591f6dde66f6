"""Payload validation for the store-scoped handlers.

Presence of required fields is checked first, in a fixed order, so the caller
always learns about the first missing field by name. Only then is the payload
parsed into its pydantic model; any type or format problem becomes an
``InvalidShape`` naming the offending field.
"""

from typing import Any, Dict, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import InvalidShape, MissingField
from .schemas import BillboardIn, CategoryIn, ProductIn, StoreIn

M = TypeVar("M", bound=BaseModel)

STORE_REQUIRED = ("name",)
BILLBOARD_REQUIRED = ("label", "labelEn", "imageUrl")
CATEGORY_REQUIRED = ("name", "billboardId")
PRODUCT_REQUIRED = ("name", "price", "categoryId", "images")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def require_fields(body: Any, required: Sequence[str]) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise InvalidShape("body", "expected a JSON object")
    for key in required:
        if _is_missing(body.get(key)):
            raise MissingField(key)
    return body


def parse_model(model: Type[M], body: Dict[str, Any]) -> M:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "body"
        msg = err["msg"]
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        raise InvalidShape(field, msg) from exc


def validate_store(body: Any) -> StoreIn:
    return parse_model(StoreIn, require_fields(body, STORE_REQUIRED))


def validate_billboard(body: Any) -> BillboardIn:
    return parse_model(BillboardIn, require_fields(body, BILLBOARD_REQUIRED))


def validate_category(body: Any) -> CategoryIn:
    return parse_model(CategoryIn, require_fields(body, CATEGORY_REQUIRED))


def validate_product(body: Any) -> ProductIn:
    return parse_model(ProductIn, require_fields(body, PRODUCT_REQUIRED))
