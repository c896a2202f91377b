from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ShopperName(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None


class Address(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = Field(default=None, min_length=2, max_length=3)


class OperationOptions(BaseModel):
    """Every option a uniform operation accepts. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    reference: str | None = Field(
        default=None,
        min_length=1,
        description="Merchant reference for the payment. Required to authorize.",
    )
    currency: str | None = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="Overrides the currency of the amount; also picks the verify currency.",
    )
    merchant_account: str | None = Field(
        default=None,
        description="Merchant account to bill. Defaults to the gateway's configured account.",
    )

    shopper_name: ShopperName | None = Field(default=None, description="Shopper name sent for risk checks.")
    shopper_email: str | None = Field(default=None, description="Shopper email sent for risk checks.")
    shopper_ip: str | None = Field(default=None, description="Shopper IP address sent for risk checks.")
    shopper_reference: str | None = Field(
        default=None,
        description="Merchant's id for the shopper; ties recurring contracts to them.",
    )
    telephone_number: str | None = Field(default=None, description="Shopper phone number.")
    date_of_birth: str | None = Field(default=None, description="Shopper date of birth, YYYY-MM-DD.")
    device_fingerprint: str | None = Field(default=None, description="Device fingerprint from the checkout page.")
    fraud_offset: int | None = Field(default=None, description="Added to the gateway's fraud score.")
    browser_info: dict[str, Any] | None = Field(
        default=None,
        description="Browser details (userAgent, acceptHeader) for 3-D Secure.",
    )

    billing_address: Address | None = Field(
        default=None,
        validation_alias=AliasChoices("billing_address", "address"),
        description="Card billing address. ``address`` is accepted as an alias.",
    )
    delivery_address: Address | None = Field(default=None, description="Address the goods ship to.")
    delivery_date: str | None = Field(default=None, description="Expected delivery date, ISO 8601.")

    selected_brand: str | None = Field(default=None, description="Forces a card brand, e.g. ``maestro``.")
    merchant_order_reference: str | None = Field(
        default=None,
        description="Groups several payments that belong to one order.",
    )
    shopper_interaction: str | None = Field(
        default=None,
        description="Sales channel: ``Ecommerce``, ``ContAuth``, ``Moto`` or ``POS``.",
    )
    recurring: dict[str, Any] | None = Field(
        default=None,
        description="Recurring contract to store the card under, e.g. ``{\"contract\": \"ONECLICK\"}``.",
    )
    recurring_processing_model: str | None = Field(
        default=None,
        description="``CardOnFile``, ``Subscription`` or ``UnscheduledCardOnFile``.",
    )
    capture_delay_hours: int | None = Field(
        default=None,
        ge=0,
        description="Hours before the gateway captures automatically; 0 captures at once.",
    )

    def is_set(self, name: str) -> bool:
        return getattr(self, name, None) not in (None, "")
