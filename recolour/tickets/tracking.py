"""Change detection for editable ticket fields.

Each tracked field declares how it is compared and rendered in history.
Values are compared by their serialized form, so a field only counts as
changed when its history rendering would change.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from .models import FieldChange, PhotoOption, Ticket, UpdateTicketFields

EMPTY_PHOTO_LIST = "(none)"


class FieldStrategy(str, Enum):
    SCALAR = "scalar"
    ARRAY_STRUCTURAL = "array_structural"
    PHOTO_LABEL_LIST = "photo_label_list"


@dataclass(frozen=True)
class TrackedField:
    name: str
    strategy: FieldStrategy
    # Name recorded in history, matching the wire format.
    label: str

    def serialize(self, value: Any) -> str:
        if self.strategy is FieldStrategy.SCALAR:
            return _serialize_scalar(value)
        if self.strategy is FieldStrategy.ARRAY_STRUCTURAL:
            return _serialize_structural(value)
        return _serialize_photo_labels(value)


# Declaration order is the order Edited history entries are written in.
TRACKED_FIELDS: tuple[TrackedField, ...] = (
    TrackedField("style", FieldStrategy.SCALAR, "style"),
    TrackedField("priority", FieldStrategy.SCALAR, "priority"),
    TrackedField("partner", FieldStrategy.SCALAR, "partner"),
    TrackedField("instructions", FieldStrategy.ARRAY_STRUCTURAL, "instructions"),
    TrackedField("reference_photos", FieldStrategy.PHOTO_LABEL_LIST, "referencePhotos"),
    TrackedField("partner_photos", FieldStrategy.PHOTO_LABEL_LIST, "partnerPhotos"),
)


def _serialize_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _serialize_structural(value: Sequence[Any]) -> str:
    return json.dumps(list(value), separators=(",", ":"), ensure_ascii=False)


def _photo_label(photo: PhotoOption) -> str:
    if photo.label is not None:
        return photo.label
    if photo.file_name is not None:
        return photo.file_name
    return "unknown"


def _serialize_photo_labels(value: Sequence[PhotoOption]) -> str:
    if not value:
        return EMPTY_PHOTO_LIST
    return ", ".join(_photo_label(photo) for photo in value)


def apply_changes(ticket: Ticket, fields: UpdateTicketFields) -> list[FieldChange]:
    """Apply provided fields that differ and return the detected changes.

    The ticket is mutated in place with deep copies of the provided values.
    """

    changes: list[FieldChange] = []
    for tracked in TRACKED_FIELDS:
        new = getattr(fields, tracked.name)
        if new is None:
            continue

        old_value = tracked.serialize(getattr(ticket, tracked.name))
        new_value = tracked.serialize(new)
        if old_value == new_value:
            continue

        setattr(ticket, tracked.name, copy.deepcopy(new))
        changes.append(FieldChange(field=tracked.label, old_value=old_value, new_value=new_value))
    return changes
