from pysatoshi.utils.Mixer import Address
from pysatoshi.mocks.token import Token
from typing import Callable, Optional


class ReentrantToken(Token):
    """Token handing control to an arbitrary hook after every transfer.

    Stands in for tokens with receive hooks (ERC777, ERC1363): the hook runs
    once balances have moved and may call back into whoever moved them.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._hook: Optional[Callable[[Address, Address, int], None]] = None

    def set_hook(self, hook: Optional[Callable[[Address, Address, int], None]]):
        self._hook = hook

    def _transfer(self, from_: Address, to: Address, amount: int):
        super()._transfer(from_, to, amount)
        if self._hook is not None:
            self._hook(from_, to, amount)
