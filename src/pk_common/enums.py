"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class AssetType(str, Enum):
    SINGLE_SPOT = "SINGLE_SPOT"
    REVENUE_SHARE = "REVENUE_SHARE"
    PARKING_LOT_BUNDLE = "PARKING_LOT_BUNDLE"


class ComplianceStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    COMPLIANT = "COMPLIANT"
    NON_COMPLIANT = "NON_COMPLIANT"


class ListingType(str, Enum):
    SALE = "SALE"
    LEASE = "LEASE"
    REVENUE_SHARE = "REVENUE_SHARE"


class ListingStatus(str, Enum):
    """ACTIVE is the only non-terminal state."""
    ACTIVE = "ACTIVE"
    SOLD = "SOLD"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class DistributionStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class LedgerEntryType(str, Enum):
    # Issuance (asset tokenization, simulated payment deposit)
    MINT = "MINT"
    # Pairwise movement (one entry per side)
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"
    # Platform fee (buyer debit + fee account credit)
    FEE = "FEE"
    FEE_REVENUE = "FEE_REVENUE"
