"""Pydantic models for GuruTvapay request and response payloads."""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CreatePaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: Union[int, float]
    merchant_order_id: str = Field(..., alias="merchantOrderId", min_length=1)
    channel: str = "web"
    purpose: str = "Online Payment"
    customer: Dict[str, Any] = Field(default_factory=dict)
    expires_in: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True, exclude={"expires_in", "metadata"})
        # optional fields are omitted rather than sent as null
        if self.expires_in is not None:
            payload["expires_in"] = self.expires_in
        if self.metadata is not None:
            payload["metadata"] = self.metadata
        return payload


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: Optional[str] = None
    expires_at: Optional[float] = None
    expires_in: Optional[float] = None

    def expiry(self, now: float) -> float:
        if self.expires_at:
            return self.expires_at
        return int(now) + (self.expires_in or 0)


__all__ = ["CreatePaymentRequest", "LoginResponse"]
