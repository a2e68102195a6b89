from pysatoshi.utils.Mixer import Mixer, Metadata, Address
from pysatoshi.openzeppelin.erc4626 import ERC4626
from pysatoshi.openzeppelin.utils.math.math import Math as OZMath
from pysatoshi.satoshi.libraries.constants_lib import ConstantsLib
from typing import Optional


class Satoshi(ERC4626):
    """Vault issuing SATS against a wrapped bitcoin such as tBTC.

    The share token reports the asset's decimals, so one whole SATS stands
    for one satoshi: with an 18 decimals asset, ``price_per_share()`` starts at
    ``10**10`` asset units.
    """

    def __init__(
        self,
        asset: Address,
        _name: str = ConstantsLib.NAME,
        _symbol: str = ConstantsLib.SYMBOL,
        decimals_offset: int = ConstantsLib.DECIMALS_OFFSET,
        metadata: Optional[Metadata] = None,
        sender=Mixer.ZERO_ADDRESS,
    ):
        assert decimals_offset >= 0, "negative decimals offset"
        self._offset: int = decimals_offset

        ERC4626.__init__(self, asset, _name, _symbol, metadata, sender)

    def decimals(self) -> int:
        return self._underlying_decimals

    def price_per_share(self) -> int:
        with Mixer.view():
            return self._convert_to_assets(10 ** self.decimals(), OZMath.Rounding.Floor)

    def _decimals_offset(self) -> int:
        return self._offset
