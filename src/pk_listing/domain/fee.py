"""Platform fee on a purchase, charged to the buyer's payment."""

from src.pk_common.amounts import bps_of


def calc_platform_fee(purchase_price: int, fee_bps: int) -> int:
    """Floor division fee: purchase_price x fee_bps // 10000.

    Rounding favours the seller; a zero fee_bps disables the fee entirely.
    """
    return bps_of(purchase_price, fee_bps)
