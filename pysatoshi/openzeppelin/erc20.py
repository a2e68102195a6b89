from pysatoshi.utils.Mixer import Mixer, Metadata, Address, ChainID, InstanceType
from pysatoshi.openzeppelin.utils.math.math import Math
from collections import defaultdict
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class ERC20:
    def __init__(
        self,
        name_: str,
        symbol_: str,
        metadata: Optional[Metadata] = None,
        sender: Address = Mixer.ZERO_ADDRESS,
    ):
        self._balances: defaultdict[Address, int] = defaultdict(int)
        self._allowances: defaultdict[Tuple[Address, Address], int] = defaultdict(int)
        self._total_supply: int = 0

        self._name = name_
        self._symbol = symbol_

        # Mixer utilities
        self.metadata = metadata or Metadata(
            ChainID.ETH_MAINNET, Mixer.ZERO_ADDRESS, name_, InstanceType.CONTRACT
        )

    def deploy(self) -> Address:
        self.metadata.address = Mixer.register(self)
        return self.metadata.address

    def name(self) -> str: return self._name
    def symbol(self) -> str: return self._symbol
    def decimals(self) -> int: return 18

    def total_supply(self) -> int:
        with Mixer.view():
            return self._total_supply

    def balance_of(self, account: Address, sender: Address = Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return self._balances[account]

    def transfer(self, to: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS) -> bool:
        with Mixer.transaction():
            self._transfer(sender, to, amount)
        return True

    def allowance(self, owner: Address, spender: Address, sender: Address = Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return self._allowances[(owner, spender)]

    def approve(self, spender: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS) -> bool:
        with Mixer.transaction():
            self._approve(sender, spender, amount)
        return True

    def transfer_from(self, from_: Address, to: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS) -> bool:
        with Mixer.transaction():
            self._spend_allowance(from_, sender, amount)
            self._transfer(from_, to, amount)
        return True

    def increase_allowance(self, spender: Address, added_value: int, sender: Address = Mixer.ZERO_ADDRESS) -> bool:
        with Mixer.transaction():
            self._approve(sender, spender, Math.add(self.allowance(sender, spender), added_value))
        return True

    def decrease_allowance(self, spender: Address, subtracted_value: int, sender: Address = Mixer.ZERO_ADDRESS) -> bool:
        with Mixer.transaction():
            current_allowance = self.allowance(sender, spender)
            assert current_allowance >= subtracted_value, "ERC20: decreased allowance below zero"
            self._approve(sender, spender, current_allowance - subtracted_value)
        return True

    # SafeERC20: a token answering False is treated like one that reverted
    def safe_transfer(self, to: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS):
        assert self.transfer(to, amount, sender), "SafeERC20: transfer failed"

    def safe_transfer_from(self, from_: Address, to: Address, amount: int, sender: Address = Mixer.ZERO_ADDRESS):
        assert self.transfer_from(from_, to, amount, sender), "SafeERC20: transfer_from failed"

    def _transfer(self, from_: Address, to: Address, amount: int):
        assert from_ != Address.ZERO_ADDRESS, "ERC20: transfer from the zero address"
        assert to != Address.ZERO_ADDRESS, "ERC20: transfer to the zero address"
        self._update(from_, to, amount)

    def _update(self, from_: Address, to: Address, amount: int):
        assert Math.in_range(amount), Math.MathOverflow
        if from_ == Mixer.ZERO_ADDRESS:
            self._total_supply = Math.add(self._total_supply, amount)
        else:
            from_balance = self._balances[from_]
            assert from_balance >= amount, "ERC20: transfer amount exceeds balance"
            self._balances[from_] = from_balance - amount

        if to == Mixer.ZERO_ADDRESS:
            self._total_supply -= amount
        else:
            self._balances[to] += amount

        logger.debug("%s Transfer(from=%s, to=%s, value=%d)", self._symbol, from_, to, amount)

    def _mint(self, account: Address, amount: int):
        assert account != Address.ZERO_ADDRESS, "ERC20: mint to the zero address"
        self._update(Mixer.ZERO_ADDRESS, account, amount)

    def _burn(self, account: Address, amount: int):
        assert account != Address.ZERO_ADDRESS, "ERC20: burn from the zero address"
        self._update(account, Mixer.ZERO_ADDRESS, amount)

    def _approve(self, owner: Address, spender: Address, amount: int):
        assert owner != Address.ZERO_ADDRESS, "ERC20: approve from the zero address"
        assert spender != Address.ZERO_ADDRESS, "ERC20: approve to the zero address"
        assert Math.in_range(amount), Math.MathOverflow
        self._allowances[(owner, spender)] = amount
        logger.debug("%s Approval(owner=%s, spender=%s, value=%d)", self._symbol, owner, spender, amount)

    def _spend_allowance(self, owner: Address, spender: Address, amount: int):
        current_allowance = self.allowance(owner, spender)
        if current_allowance != Math.MAX_UINT256:
            assert current_allowance >= amount, "ERC20: insufficient allowance"
            self._approve(owner, spender, current_allowance - amount)
