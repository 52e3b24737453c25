"""
Record serialization

The UI layer exchanges records as plain dictionaries with camelCase keys
and ISO-8601 timestamps. RecordMixin maps those dictionaries onto the
dataclass entities and back, and merges partial updates.
"""

from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from shared.domain.value_objects import format_timestamp


class RecordMixin:
    """
    Dictionary round-tripping for dataclass entities

    Subclasses declare FIELD_ALIASES (external key -> attribute name) for
    every attribute whose external key differs, and override
    ``coerce_field`` for attributes that need conversion on the way in.
    """

    FIELD_ALIASES: Dict[str, str] = {}
    READ_ONLY_FIELDS: Tuple[str, ...] = ('id',)

    @classmethod
    def attribute_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.init and not f.name.startswith('_')]

    @classmethod
    def external_key(cls, attribute: str) -> str:
        for key, name in cls.FIELD_ALIASES.items():
            if name == attribute:
                return key
        return attribute

    @classmethod
    def normalize_keys(cls, data: dict, *, strict: bool = True, allow_read_only: bool = False) -> dict:
        """
        Map external keys (camelCase or attribute names) to attribute names

        Raises ValueError for unknown keys when ``strict`` and for
        read-only attributes unless ``allow_read_only``.
        """
        known = set(cls.attribute_names())
        normalized = {}
        for key, value in data.items():
            name = cls.FIELD_ALIASES.get(key, key)
            if name not in known:
                if strict:
                    raise ValueError(f"Unknown {cls.__name__} field: {key}")
                continue
            if name in cls.READ_ONLY_FIELDS and not allow_read_only:
                raise ValueError(f"{cls.__name__} field '{key}' cannot be changed")
            normalized[name] = value
        return normalized

    @classmethod
    def coerce_field(cls, name: str, value):
        """Convert an external value for attribute ``name``"""
        return value

    @classmethod
    def from_dict(cls, data: dict):
        normalized = cls.normalize_keys(data, strict=False, allow_read_only=True)
        kwargs = {name: cls.coerce_field(name, value) for name, value in normalized.items()}
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {
            self.external_key(name): _dump(getattr(self, name))
            for name in self.attribute_names()
        }

    def apply_changes(self, changes: dict) -> List[str]:
        """
        Merge a partial update; returns the attribute names that were set

        Every value is converted before any is assigned, so a bad value
        leaves the record untouched.
        """
        coerced = {
            name: self.coerce_field(name, value)
            for name, value in self.normalize_keys(changes).items()
        }
        for name, value in coerced.items():
            setattr(self, name, value)
        return list(coerced)


def _dump(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_timestamp(value)
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    return value


def coerce_enum(enum_cls, value):
    """Enum member from value or member; ValueError lists the allowed values"""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {allowed}") from None


def unique_ids(values: Iterable[str]) -> List[str]:
    """Drop duplicates while keeping first-seen order"""
    return list(dict.fromkeys(values))
