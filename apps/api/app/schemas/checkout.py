from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    billing_types: list[str] | str | None = Field(default=None, alias="billingTypes")
    value: float | None = None
    quantity: int | None = None
    description: str | None = None
    minutes_to_expire: int | None = Field(default=None, alias="minutesToExpire")


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    link: str
    checkout_id: str | None = Field(default=None, alias="checkoutId")
    external_reference: str = Field(alias="externalReference")
    status: str | None = None


class CheckoutErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str | None = None
