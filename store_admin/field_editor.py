"""Editing state for the dynamic field definitions of a category.

The editor is a reducer: ``apply(fields, op)`` takes the current tuple of
drafts and one operation and returns the next tuple, never mutating its input.
``FieldEditor`` wraps it for callers that want a stateful object.

Operations address fields and options by position, like the dashboard form.
Every draft and every option also carries a stable key assigned at creation,
so a caller that queued an edit before a removal can re-resolve the current
position with ``index_of`` / ``option_index_of`` instead of trusting a stale
index.

Drafts are permissive (a blank field name is fine while editing); ``submit``
is the single fallible step that turns them into ``FieldDefinition`` records.
Options survive a type switch away from "dropdown" so switching back restores
them, but only dropdown fields carry options once submitted.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import IndexOutOfRange, InvalidShape, MissingField
from .schemas import FIELD_TYPES, FieldDefinition


def _new_key() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class OptionDraft:
    value: str = ""
    key: str = field(default_factory=_new_key)


@dataclass(frozen=True)
class FieldDraft:
    field_name: str = ""
    field_type: str = "text"
    options: Tuple[OptionDraft, ...] = ()
    key: str = field(default_factory=_new_key)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "fieldType": self.field_type,
            "options": [o.value for o in self.options],
        }


Fields = Tuple[FieldDraft, ...]


# ---------------------------------------------------------
# Operations
# ---------------------------------------------------------
@dataclass(frozen=True)
class AddField:
    key: Optional[str] = None


@dataclass(frozen=True)
class UpdateField:
    index: int
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class RemoveField:
    index: int


@dataclass(frozen=True)
class AddOption:
    field_index: int
    key: Optional[str] = None


@dataclass(frozen=True)
class UpdateOption:
    field_index: int
    option_index: int
    value: str


@dataclass(frozen=True)
class RemoveOption:
    field_index: int
    option_index: int


Operation = Union[AddField, UpdateField, RemoveField, AddOption, UpdateOption, RemoveOption]

# partial updates arrive with the form's camelCase keys
_EDITABLE = {
    "fieldName": "field_name",
    "field_name": "field_name",
    "fieldType": "field_type",
    "field_type": "field_type",
}


def _check_index(what: str, index: int, size: int) -> None:
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < size:
        raise IndexOutOfRange(what, index, size)


def _field_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in changes.items():
        attr = _EDITABLE.get(k)
        if attr is None:
            raise InvalidShape(k, "cannot be edited")
        if attr == "field_type" and v not in FIELD_TYPES:
            raise InvalidShape("fieldType", f"must be one of {', '.join(FIELD_TYPES)}")
        if attr == "field_name" and not isinstance(v, str):
            raise InvalidShape("fieldName", "must be a string")
        out[attr] = v
    return out


def _replace_at(fields: Fields, index: int, new: FieldDraft) -> Fields:
    return fields[:index] + (new,) + fields[index + 1:]


def apply(fields: Fields, op: Operation) -> Fields:
    """Return the field list that results from applying ``op`` to ``fields``."""
    fields = tuple(fields)

    if isinstance(op, AddField):
        draft = FieldDraft(key=op.key) if op.key else FieldDraft()
        return fields + (draft,)

    if isinstance(op, UpdateField):
        _check_index("field", op.index, len(fields))
        return _replace_at(fields, op.index, replace(fields[op.index], **_field_changes(op.changes)))

    if isinstance(op, RemoveField):
        _check_index("field", op.index, len(fields))
        return fields[:op.index] + fields[op.index + 1:]

    if isinstance(op, AddOption):
        _check_index("field", op.field_index, len(fields))
        target = fields[op.field_index]
        opt = OptionDraft(key=op.key) if op.key else OptionDraft()
        return _replace_at(fields, op.field_index, replace(target, options=target.options + (opt,)))

    if isinstance(op, UpdateOption):
        _check_index("field", op.field_index, len(fields))
        target = fields[op.field_index]
        _check_index("option", op.option_index, len(target.options))
        if not isinstance(op.value, str):
            raise InvalidShape("option", "must be a string")
        opts = list(target.options)
        opts[op.option_index] = replace(opts[op.option_index], value=op.value)
        return _replace_at(fields, op.field_index, replace(target, options=tuple(opts)))

    if isinstance(op, RemoveOption):
        _check_index("field", op.field_index, len(fields))
        target = fields[op.field_index]
        _check_index("option", op.option_index, len(target.options))
        opts = target.options[:op.option_index] + target.options[op.option_index + 1:]
        return _replace_at(fields, op.field_index, replace(target, options=opts))

    raise TypeError(f"unknown field editor operation: {op!r}")


def drafts_from(definitions: Iterable[Union[FieldDefinition, Mapping[str, Any]]]) -> Fields:
    """Seed drafts from persisted field definitions (models or raw dicts)."""
    out = []
    for d in definitions:
        if isinstance(d, FieldDefinition):
            name, ftype, options = d.field_name, d.field_type, d.options
        else:
            name = d.get("fieldName", "")
            ftype = d.get("fieldType", "text")
            options = d.get("options") or []
        out.append(FieldDraft(
            field_name=name,
            field_type=ftype,
            options=tuple(OptionDraft(value=o) for o in options),
        ))
    return tuple(out)


def submit(fields: Fields) -> List[FieldDefinition]:
    """Validate drafts into field definitions ready to be persisted."""
    out: List[FieldDefinition] = []
    for draft in fields:
        if not draft.field_name.strip():
            raise MissingField("fieldName")
        out.append(FieldDefinition(
            field_name=draft.field_name,
            field_type=draft.field_type,
            options=[o.value for o in draft.options] if draft.field_type == "dropdown" else [],
        ))
    return out


class FieldEditor:
    """Stateful wrapper over ``apply`` for a single edit session."""

    def __init__(self, fields: Fields = ()):
        self._fields: Fields = tuple(fields)

    @classmethod
    def from_fields(cls, definitions) -> "FieldEditor":
        return cls(drafts_from(definitions or []))

    @property
    def drafts(self) -> Fields:
        return self._fields

    @property
    def fields(self) -> List[Dict[str, Any]]:
        return [d.as_dict() for d in self._fields]

    def __len__(self) -> int:
        return len(self._fields)

    def dispatch(self, op: Operation) -> Fields:
        self._fields = apply(self._fields, op)
        return self._fields

    def add_field(self) -> str:
        key = _new_key()
        self.dispatch(AddField(key=key))
        return key

    def update_field(self, index: int, partial: Mapping[str, Any]) -> None:
        self.dispatch(UpdateField(index, dict(partial)))

    def remove_field(self, index: int) -> None:
        self.dispatch(RemoveField(index))

    def add_option(self, field_index: int) -> str:
        key = _new_key()
        self.dispatch(AddOption(field_index, key=key))
        return key

    def update_option(self, field_index: int, option_index: int, value: str) -> None:
        self.dispatch(UpdateOption(field_index, option_index, value))

    def remove_option(self, field_index: int, option_index: int) -> None:
        self.dispatch(RemoveOption(field_index, option_index))

    def index_of(self, key: str) -> int:
        for i, d in enumerate(self._fields):
            if d.key == key:
                return i
        raise KeyError(key)

    def option_index_of(self, field_key: str, option_key: str) -> Tuple[int, int]:
        fi = self.index_of(field_key)
        for oi, o in enumerate(self._fields[fi].options):
            if o.key == option_key:
                return fi, oi
        raise KeyError(option_key)

    def submit(self) -> List[FieldDefinition]:
        return submit(self._fields)
