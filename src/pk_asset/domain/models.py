"""Domain models for pk_asset: pure dataclasses plus the yield formula."""

from dataclasses import dataclass

from src.pk_common.amounts import BPS_DENOMINATOR


@dataclass
class ParkingAsset:
    id: str
    token_denomination: str          # the asset's own fungible token, "PKA-..."
    asset_type: str                  # AssetType value
    parking_lot_id: int
    spot_label: str
    total_supply: int
    circulating_supply: int          # <= total_supply
    estimated_value: int
    annual_revenue: int
    revenue_share_bps: int           # 0..10000
    institutional_operator: str
    compliance_status: str           # ComplianceStatus value
    is_active: bool
    is_tradeable: bool
    created_at: int                  # Unix seconds

    def calculate_yield(self) -> int:
        return calculate_yield(self.estimated_value, self.annual_revenue)


def calculate_yield(estimated_value: int, annual_revenue: int) -> int:
    """Annual yield in basis points: floor(annual_revenue * 10000 / estimated_value).

    An unvalued asset yields 0 rather than dividing by zero.
    """
    if estimated_value == 0:
        return 0
    return annual_revenue * BPS_DENOMINATOR // estimated_value


def token_denomination_for(asset_id: str) -> str:
    """Denomination handle of an asset's token: "AST-<hex>" -> "PKA-<hex>"."""
    return "PKA-" + asset_id.split("-", 1)[-1]
