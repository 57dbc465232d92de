"""Request and response models for the HTTP API (camelCase on the wire)."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from recolour.tickets.models import (
    CreateTicketInput,
    PhotoOption,
    TicketFilters,
    TicketSort,
    UpdateTicketFields,
)
from recolour.tickets.state import HistoryEventType, Priority, TicketStatus


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PhotoOptionModel(ApiModel):
    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    thumbnail_url: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)

    def to_domain(self) -> PhotoOption:
        return PhotoOption(
            id=self.id,
            label=self.label,
            file_name=self.file_name,
            thumbnail_url=self.thumbnail_url,
            image_url=self.image_url,
        )


def _photos_to_domain(photos: list[PhotoOptionModel] | None) -> list[PhotoOption] | None:
    if photos is None:
        return None
    return [photo.to_domain() for photo in photos]


class HistoryEventModel(ApiModel):
    type: HistoryEventType
    from_status: TicketStatus | None
    to_status: TicketStatus | None
    actor: str
    at: datetime
    reason: str | None = None
    field: str | None = None
    old_value: str | None = None
    new_value: str | None = None


class TicketResponse(ApiModel):
    id: str
    style: str
    priority: Priority
    partner: str
    instructions: list[str]
    reference_photos: list[PhotoOptionModel]
    partner_photos: list[PhotoOptionModel]
    status: TicketStatus
    created_at: datetime
    updated_at: datetime
    history: list[HistoryEventModel]
    approved_date: datetime | None = None
    available_actions: list[str] | None = None


class TicketCreateRequest(ApiModel):
    style: str = Field(..., min_length=1)
    priority: Priority
    partner: str = Field(..., min_length=1)
    instructions: list[str] = Field(..., min_length=1)
    reference_photos: list[PhotoOptionModel] | None = None

    @field_validator("instructions")
    @classmethod
    def _non_blank_instructions(cls, value: list[str]) -> list[str]:
        if any(not item for item in value):
            raise ValueError("Instructions must not be empty")
        return value

    def to_domain(self) -> CreateTicketInput:
        return CreateTicketInput(
            style=self.style,
            priority=self.priority,
            partner=self.partner,
            instructions=list(self.instructions),
            reference_photos=_photos_to_domain(self.reference_photos) or [],
        )


class TicketUpdateRequest(ApiModel):
    style: str | None = Field(default=None, min_length=1)
    priority: Priority | None = None
    partner: str | None = Field(default=None, min_length=1)
    instructions: list[str] | None = Field(default=None, min_length=1)
    reference_photos: list[PhotoOptionModel] | None = Field(default=None, min_length=1)
    partner_photos: list[PhotoOptionModel] | None = None

    @field_validator("instructions")
    @classmethod
    def _non_blank_instructions(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and any(not item for item in value):
            raise ValueError("Instructions must not be empty")
        return value

    def has_changes(self) -> bool:
        return any(value is not None for value in self.model_dump().values())

    def to_domain(self) -> UpdateTicketFields:
        return UpdateTicketFields(
            style=self.style,
            priority=self.priority,
            partner=self.partner,
            instructions=None if self.instructions is None else list(self.instructions),
            reference_photos=_photos_to_domain(self.reference_photos),
            partner_photos=_photos_to_domain(self.partner_photos),
        )


class RejectRequest(ApiModel):
    reason: str = Field(..., min_length=1)

    @field_validator("reason", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class TicketListQuery(ApiModel):
    status: TicketStatus | None = None
    priority: Priority | None = None
    partner: str | None = None
    sort_by: Literal["createdAt", "priority", "partner", "status"] | None = None
    sort_order: Literal["asc", "desc"] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _normalise(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def filters(self) -> TicketFilters:
        return TicketFilters(status=self.status, priority=self.priority, partner=self.partner)

    def sort(self) -> TicketSort:
        return TicketSort(sort_by=self.sort_by, sort_order=self.sort_order)


class PhotoUploadRequest(ApiModel):
    image_data: bytes
    thumbnail_data: bytes
    file_name: str = Field(..., min_length=1)

    @field_validator("image_data", "thumbnail_data", mode="before")
    @classmethod
    def _decode_base64(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value:
            raise ValueError("Expected a non-empty base64 string")
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError("Invalid base64 data") from exc


class SelectOptionModel(ApiModel):
    label: str
    value: str


class ColumnModel(ApiModel):
    key: str
    label: str


class FilterOptionModel(ApiModel):
    key: str
    label: str
    options: list[SelectOptionModel]
    placeholder: str | None = None


class ViewMetaModel(ApiModel):
    filters: list[FilterOptionModel]
    sort_options: list[SelectOptionModel]
    columns: list[ColumnModel]
    default_sort: str | None = None


class TicketListResponse(ApiModel):
    data: list[TicketResponse]
    meta: ViewMetaModel


class PartnerOverviewRowModel(ApiModel):
    partner: str
    total: int
    awaiting_receipt: int
    in_progress: int
    completed: int


class PartnerOverviewResponse(ApiModel):
    data: list[PartnerOverviewRowModel]
    meta: ViewMetaModel


class KpiCardModel(ApiModel):
    label: str
    value: int | str
    tone: str | None = None


class BreakdownRowModel(ApiModel):
    label: str
    count: int
    pct: int


class DashboardStatsResponse(ApiModel):
    kpi_cards: list[KpiCardModel]
    status_breakdown: list[BreakdownRowModel]
    priority_breakdown: list[BreakdownRowModel]
    partner_overview: list[PartnerOverviewRowModel]
    partner_overview_columns: list[ColumnModel]


class MetaOptionsResponse(ApiModel):
    partners: list[str]
    priorities: list[Priority]
    style_options: list[str]
    photo_options: list[PhotoOptionModel]
