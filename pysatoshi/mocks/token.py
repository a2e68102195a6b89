from pysatoshi.utils.Mixer import Mixer, Address, Metadata
from pysatoshi.openzeppelin.erc20 import ERC20
from typing import Optional


class Token(ERC20):
    def __init__(
        self,
        name_: str,
        symbol_: str,
        decimals: int,
        metadata: Optional[Metadata] = None,
        sender=Mixer.ZERO_ADDRESS,
    ):
        super().__init__(name_, symbol_, metadata, sender)
        self._decimals: int = decimals

    def decimals(self) -> int:
        return self._decimals

    def mint(self, account: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS) -> int:
        with Mixer.transaction():
            self._mint(account, amount)
        return amount

    def burn(self, account: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS) -> int:
        with Mixer.transaction():
            self._burn(account, amount)
        return amount
