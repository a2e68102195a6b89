from pysatoshi.openzeppelin.erc20 import ERC20
from pysatoshi.utils.Mixer import Mixer, Metadata, Address
from pysatoshi.openzeppelin.utils.math.math import Math as OZMath
from pysatoshi.satoshi.libraries.conversion_lib import ConversionLib
from pysatoshi.satoshi.libraries.errors_lib import ErrorsLib
from pysatoshi.satoshi.types import PoolState
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ERC4626(ERC20, ABC):
    """Tokenized vault over a single asset.

    The vault is its own share ledger. Exchange rates are computed from an
    internally tracked ``PoolState`` rather than from the asset balance the
    vault holds, so assets sent to the vault outside ``deposit``/``mint`` do
    not move the rate.

    Every mutating call validates against the state observed before the call,
    then commits the pool accounting before handing control to the asset
    ledger on the way out, and runs inside ``Mixer.transaction()`` so a failure
    anywhere leaves every contract untouched.
    """

    def __init__(
        self,
        asset_: Address,
        name_: str = "ERC4626",
        symbol_: str = "ERC4626",
        metadata: Optional[Metadata] = None,
        sender: Address = Mixer.ZERO_ADDRESS,
    ):
        ERC20.__init__(self, name_, symbol_, metadata, sender)

        assert asset_ != Mixer.ZERO_ADDRESS, ErrorsLib.ZeroAddress
        self._underlying_decimals: int = Mixer.contracts_and_eoas[asset_].decimals()
        self._asset = asset_
        self._pool = PoolState()

    def decimals(self) -> int:
        return self._underlying_decimals + self._decimals_offset()

    def asset(self) -> Address:
        return self._asset

    def total_assets(self) -> int:
        with Mixer.view():
            return self._pool.tracked_assets

    def pool_state(self) -> PoolState:
        with Mixer.view():
            return replace(self._pool)

    def convert_to_shares(self, assets: int) -> int:
        with Mixer.view():
            return self._convert_to_shares(assets, OZMath.Rounding.Floor)

    def convert_to_assets(self, shares: int) -> int:
        with Mixer.view():
            return self._convert_to_assets(shares, OZMath.Rounding.Floor)

    def max_deposit(self, receiver: Address, sender=Mixer.ZERO_ADDRESS) -> int:
        return OZMath.MAX_UINT256

    def max_mint(self, receiver: Address, sender=Mixer.ZERO_ADDRESS) -> int:
        return OZMath.MAX_UINT256

    def max_withdraw(self, owner: Address, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return self._convert_to_assets(self.balance_of(owner), OZMath.Rounding.Floor)

    def max_redeem(self, owner: Address, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return self.balance_of(owner)

    # rounding always favours the vault: shares out and assets out round
    # down, shares in and assets in round up
    def preview_deposit(self, assets: int, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return ConversionLib.to_shares_down(assets, self._pool, self._decimals_offset())

    def preview_mint(self, shares: int, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return ConversionLib.to_assets_up(shares, self._pool, self._decimals_offset())

    def preview_withdraw(self, assets: int, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return ConversionLib.to_shares_up(assets, self._pool, self._decimals_offset())

    def preview_redeem(self, shares: int, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.view():
            return ConversionLib.to_assets_down(shares, self._pool, self._decimals_offset())

    def deposit(self, assets: int, receiver: Address, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.transaction():
            assert assets > 0, ErrorsLib.ZeroAssets
            assert assets <= self.max_deposit(receiver, sender), ErrorsLib.ExceededMaxDeposit
            shares = self.preview_deposit(assets, sender)
            assert shares > 0, ErrorsLib.ZeroShares
            self._deposit(sender, receiver, assets, shares)
        return shares

    def mint(self, shares: int, receiver: Address, sender=Mixer.ZERO_ADDRESS) -> int:
        with Mixer.transaction():
            assert shares > 0, ErrorsLib.ZeroShares
            assert shares <= self.max_mint(receiver, sender), ErrorsLib.ExceededMaxMint
            assets = self.preview_mint(shares, sender)
            # unreachable while the virtual asset keeps the numerator positive
            assert assets > 0, ErrorsLib.ZeroAssets
            self._deposit(sender, receiver, assets, shares)
        return assets

    def withdraw(
        self, assets: int, receiver: Address, owner: Address, sender=Mixer.ZERO_ADDRESS
    ) -> int:
        with Mixer.transaction():
            assert assets > 0, ErrorsLib.ZeroAssets
            assert assets <= self.max_withdraw(owner, sender), ErrorsLib.InsufficientBalance
            shares = self.preview_withdraw(assets, sender)
            self._withdraw(sender, receiver, owner, assets, shares)
        return shares

    def redeem(
        self, shares: int, receiver: Address, owner: Address, sender=Mixer.ZERO_ADDRESS
    ) -> int:
        with Mixer.transaction():
            assert shares > 0, ErrorsLib.ZeroShares
            assert shares <= self.max_redeem(owner, sender), ErrorsLib.InsufficientBalance
            assets = self.preview_redeem(shares, sender)
            self._withdraw(sender, receiver, owner, assets, shares)
        return assets

    def _convert_to_shares(self, assets: int, rounding: OZMath.Rounding) -> int:
        return ConversionLib.to_shares(assets, self._pool, self._decimals_offset(), rounding)

    def _convert_to_assets(self, shares: int, rounding: OZMath.Rounding) -> int:
        return ConversionLib.to_assets(shares, self._pool, self._decimals_offset(), rounding)

    def _deposit(self, caller: Address, receiver: Address, assets: int, shares: int):
        assert receiver != Mixer.ZERO_ADDRESS, ErrorsLib.ZeroAddress

        Mixer.contracts_and_eoas[self._asset].safe_transfer_from(
            caller, self.metadata.address, assets, self.metadata.address
        )
        self._pool.tracked_assets = OZMath.add(self._pool.tracked_assets, assets)
        self._mint(receiver, shares)
        self._pool.total_shares = OZMath.add(self._pool.total_shares, shares)

        logger.debug(
            "%s Deposit(sender=%s, owner=%s, assets=%d, shares=%d)",
            self._symbol, caller, receiver, assets, shares,
        )
        self._check_pool_state()

    def _withdraw(
        self,
        caller: Address,
        receiver: Address,
        owner: Address,
        assets: int,
        shares: int,
    ):
        assert receiver != Mixer.ZERO_ADDRESS, ErrorsLib.ZeroAddress
        if caller != owner:
            assert (
                self.allowance(owner, caller) >= shares
            ), ErrorsLib.InsufficientAuthorization
            self._spend_allowance(owner, caller, shares)

        self._burn(owner, shares)
        self._pool.total_shares = OZMath.sub(self._pool.total_shares, shares)
        # committed before the asset ledger runs any code of its own
        self._pool.tracked_assets = OZMath.sub(self._pool.tracked_assets, assets)
        Mixer.contracts_and_eoas[self._asset].safe_transfer(
            receiver, assets, self.metadata.address
        )

        logger.debug(
            "%s Withdraw(sender=%s, receiver=%s, owner=%s, assets=%d, shares=%d)",
            self._symbol, caller, receiver, owner, assets, shares,
        )
        self._check_pool_state()

    def _check_pool_state(self):
        assert (
            self._pool.total_shares == self.total_supply()
        ), ErrorsLib.InconsistentPoolState
        assert (
            0
            <= self._pool.tracked_assets
            <= Mixer.contracts_and_eoas[self._asset].balance_of(self.metadata.address)
        ), ErrorsLib.InconsistentPoolState

    @abstractmethod
    def _decimals_offset(self) -> int:
        return 0
