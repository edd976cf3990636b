"""Pydantic models describing the WooCommerce REST order payloads."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_blank(value: object) -> object:
    return "" if value is None else value


def _number_to_text(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return str(value)
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class WooBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BillingPayload(WooBaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address_1: str = ""
    city: str = ""

    @field_validator(
        "first_name", "last_name", "email", "phone", "address_1", "city", mode="before"
    )
    @classmethod
    def _normalize_text(cls, value: object) -> object:
        return _none_to_blank(value)


class LineItemPayload(WooBaseModel):
    id: int | None = None
    name: str = ""
    sku: str | None = None
    quantity: str = ""
    price: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: object) -> object:
        return _none_to_blank(value)

    @field_validator("sku", mode="before")
    @classmethod
    def _normalize_sku(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def _normalize_numbers(cls, value: object) -> object:
        return _number_to_text(value)


class OrderPayload(WooBaseModel):
    id: int | str
    status: str | None = None
    billing: BillingPayload = Field(default_factory=BillingPayload)
    line_items: list[LineItemPayload] = Field(default_factory=list)

    @field_validator("billing", mode="before")
    @classmethod
    def _missing_billing(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("line_items", mode="before")
    @classmethod
    def _missing_line_items(cls, value: object) -> object:
        return [] if value is None else value


class ErrorResponse(WooBaseModel):
    code: str
    message: str


OrderPayloadInput = OrderPayload | Mapping[str, object]
