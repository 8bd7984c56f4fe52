"""Pydantic schemas for pk_admin API."""

from pydantic import BaseModel, Field


class UpdatePlatformFeeRequest(BaseModel):
    fee_bps: int = Field(..., ge=0, description="Platform fee in basis points")


class MintPaymentTokenRequest(BaseModel):
    denomination: str
    to: str
    amount: int


class PlatformFeeResponse(BaseModel):
    fee_bps: int
    max_fee_bps: int
    fee_account: str


class MintResponse(BaseModel):
    denomination: str
    to: str
    amount: int
    balance_after: int


class VolumeItem(BaseModel):
    payment_denomination: str
    volume: int
    fee_revenue: int


class MarketplaceStats(BaseModel):
    total_assets: int
    tradeable_assets: int
    average_yield_bps: int
    total_listings: int
    active_listings: int
    total_trades: int
    total_distributions: int
    platform_fee_bps: int
    volume: list[VolumeItem]
