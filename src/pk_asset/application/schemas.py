"""Pydantic schemas for pk_asset API."""

from pydantic import BaseModel, Field

from src.pk_asset.domain.models import ParkingAsset
from src.pk_common.datetime_utils import to_iso
from src.pk_common.enums import AssetType, ComplianceStatus

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TokenizeAssetRequest(BaseModel):
    # Amount bounds are enforced by the domain rules so callers get typed error codes.
    parking_lot_id: int = Field(..., ge=0, description="External parking lot reference")
    spot_label: str = Field(..., description="Spot label, at most 32 UTF-8 bytes")
    asset_type: AssetType
    total_supply: int
    estimated_value: int
    annual_revenue: int
    revenue_share_bps: int = Field(..., description="Holder revenue share, 0-10000 bps")


class UpdateComplianceRequest(BaseModel):
    compliance_status: ComplianceStatus


class SetFlagRequest(BaseModel):
    value: bool


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AssetDetail(BaseModel):
    id: str
    token_denomination: str
    asset_type: str
    parking_lot_id: int
    spot_label: str
    total_supply: int
    circulating_supply: int
    estimated_value: int
    annual_revenue: int
    revenue_share_bps: int
    institutional_operator: str
    compliance_status: str
    is_active: bool
    is_tradeable: bool
    yield_bps: int
    created_at: int
    created_at_iso: str | None

    @classmethod
    def from_domain(cls, asset: ParkingAsset) -> "AssetDetail":
        return cls(
            id=asset.id,
            token_denomination=asset.token_denomination,
            asset_type=asset.asset_type,
            parking_lot_id=asset.parking_lot_id,
            spot_label=asset.spot_label,
            total_supply=asset.total_supply,
            circulating_supply=asset.circulating_supply,
            estimated_value=asset.estimated_value,
            annual_revenue=asset.annual_revenue,
            revenue_share_bps=asset.revenue_share_bps,
            institutional_operator=asset.institutional_operator,
            compliance_status=asset.compliance_status,
            is_active=asset.is_active,
            is_tradeable=asset.is_tradeable,
            yield_bps=asset.calculate_yield(),
            created_at=asset.created_at,
            created_at_iso=to_iso(asset.created_at),
        )


class AssetListResponse(BaseModel):
    items: list[AssetDetail]
    next_cursor: str | None
    has_more: bool


class YieldResponse(BaseModel):
    asset_id: str
    estimated_value: int
    annual_revenue: int
    yield_bps: int
