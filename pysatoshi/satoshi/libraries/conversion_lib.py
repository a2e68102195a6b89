from pysatoshi.openzeppelin.utils.math.math import Math
from pysatoshi.satoshi.libraries.constants_lib import ConstantsLib
from pysatoshi.satoshi.types import PoolState


class ConversionLib:
    """Exchange rate between assets and shares of a single pool.

    Both directions add a virtual share supply of ``10**decimals_offset`` and
    one virtual asset to the real totals. On an empty pool this fixes the rate
    at ``10**decimals_offset`` shares per asset, and it makes inflating the
    rate with a donation cost the donor more than it can take from anyone.
    """

    def virtual_shares(decimals_offset: int) -> int:
        return 10**decimals_offset

    def to_shares(assets: int, pool: PoolState, decimals_offset: int, rounding: Math.Rounding) -> int:
        return Math.mul_div(
            assets,
            Math.add(pool.total_shares, ConversionLib.virtual_shares(decimals_offset)),
            Math.add(pool.tracked_assets, ConstantsLib.VIRTUAL_ASSETS),
            rounding,
        )

    def to_assets(shares: int, pool: PoolState, decimals_offset: int, rounding: Math.Rounding) -> int:
        return Math.mul_div(
            shares,
            Math.add(pool.tracked_assets, ConstantsLib.VIRTUAL_ASSETS),
            Math.add(pool.total_shares, ConversionLib.virtual_shares(decimals_offset)),
            rounding,
        )

    def to_shares_down(assets: int, pool: PoolState, decimals_offset: int) -> int: return ConversionLib.to_shares(assets, pool, decimals_offset, Math.Rounding.Floor)
    def to_shares_up(assets: int, pool: PoolState, decimals_offset: int) -> int: return ConversionLib.to_shares(assets, pool, decimals_offset, Math.Rounding.Ceil)
    def to_assets_down(shares: int, pool: PoolState, decimals_offset: int) -> int: return ConversionLib.to_assets(shares, pool, decimals_offset, Math.Rounding.Floor)
    def to_assets_up(shares: int, pool: PoolState, decimals_offset: int) -> int: return ConversionLib.to_assets(shares, pool, decimals_offset, Math.Rounding.Ceil)
