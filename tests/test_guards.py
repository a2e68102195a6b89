"""Rejected calls: every guard fires before any effect and leaves no trace."""

import pytest
from hypothesis import given, strategies as st

from pysatoshi.mocks.token import Token
from pysatoshi.satoshi.libraries.errors_lib import ErrorsLib
from pysatoshi.satoshi.satoshi import Satoshi
from pysatoshi.satoshi.types import PoolState
from pysatoshi.utils.Mixer import Address, Mixer

ONE_TBTC = 10**18
MAX_UINT256 = 2**256 - 1


def snapshot(sats, tbtc, *accounts):
    pool = sats.pool_state()
    return (
        pool.tracked_assets,
        pool.total_shares,
        sats.total_supply(),
        tbtc.balance_of(sats.metadata.address),
        tuple(sats.balance_of(a) for a in accounts),
        tuple(tbtc.balance_of(a) for a in accounts),
    )


@pytest.fixture
def funded(sats, deployer):
    sats.deposit(ONE_TBTC, deployer, deployer)
    return sats


def test_deposit_zero_assets(sats, deployer):
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroAssets):
        sats.deposit(0, deployer, deployer)


def test_mint_zero_shares(sats, deployer):
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroShares):
        sats.mint(0, deployer, deployer)


def test_withdraw_zero_assets(funded, deployer):
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroAssets):
        funded.withdraw(0, deployer, deployer, deployer)


def test_redeem_zero_shares(funded, deployer):
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroShares):
        funded.redeem(0, deployer, deployer, deployer)


def test_negative_amounts_are_rejected(funded, deployer):
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroAssets):
        funded.deposit(-1, deployer, deployer)
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroShares):
        funded.redeem(-1, deployer, deployer, deployer)


def test_deposit_rounding_to_zero_shares(tbtc, hacker, user):
    vault = Mixer.contracts_and_eoas[Satoshi(tbtc.metadata.address, "Flat", "FLAT", 0).deploy()]
    tbtc.approve(vault.metadata.address, MAX_UINT256, user)

    # rounding keeps tracked_assets + 1 <= total_shares + 10**offset for any
    # sequence of vault calls (see below), so a pool worth more than one asset
    # per share can only be seeded
    tbtc.transfer(vault.metadata.address, 10, hacker)
    vault._pool = PoolState(tracked_assets=10, total_shares=0)

    assert vault.preview_deposit(5) == 0
    before = snapshot(vault, tbtc, user)
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroShares):
        vault.deposit(5, user, user)
    assert snapshot(vault, tbtc, user) == before

    assert vault.deposit(11, user, user) == 1


def test_dust_exits_leave_residual_assets_without_zeroing_deposits(tbtc, user):
    vault = Mixer.contracts_and_eoas[Satoshi(tbtc.metadata.address, "Tenth", "TENTH", 1).deploy()]
    tbtc.approve(vault.metadata.address, MAX_UINT256, user)

    assert vault.deposit(1, user, user) == 10
    for _ in range(10):
        assert vault.redeem(1, user, user, user) == 0
    assert vault.pool_state() == PoolState(tracked_assets=1, total_shares=0)
    assert vault.preview_deposit(1) == 5

    # mint one share, give it back for nothing, until a share is worth a whole asset
    for _ in range(20):
        vault.mint(1, user, user)
        vault.redeem(1, user, user, user)
    assert vault.pool_state() == PoolState(tracked_assets=9, total_shares=0)
    assert vault.preview_deposit(1) == 1
    assert vault.deposit(1, user, user) == 1


@given(
    st.lists(
        st.tuples(
            st.sampled_from(["deposit", "mint", "withdraw", "redeem"]),
            st.integers(min_value=1, max_value=50),
        ),
        max_size=40,
    )
)
def test_vault_calls_never_price_a_share_above_one_asset(calls):
    Mixer.reset()
    account = Address.new()
    token = Mixer.contracts_and_eoas[Token("Custom tBTC", "tBTC", 18).deploy()]
    vault = Mixer.contracts_and_eoas[Satoshi(token.metadata.address, "Tenth", "TENTH", 1).deploy()]
    token.mint(account, 10**6)
    token.approve(vault.metadata.address, MAX_UINT256, account)

    for name, amount in calls:
        try:
            if name in ("deposit", "mint"):
                getattr(vault, name)(amount, account, account)
            else:
                getattr(vault, name)(amount, account, account, account)
        except AssertionError:
            pass
        pool = vault.pool_state()
        assert pool.tracked_assets + 1 <= pool.total_shares + 10
        assert vault.preview_deposit(1) >= 1


def test_withdraw_more_than_owned(funded, tbtc, deployer, user):
    before = snapshot(funded, tbtc, deployer, user)
    with pytest.raises(AssertionError, match=ErrorsLib.InsufficientBalance):
        funded.withdraw(ONE_TBTC + 1, deployer, deployer, deployer)
    with pytest.raises(AssertionError, match=ErrorsLib.InsufficientBalance):
        funded.withdraw(1, user, user, user)
    assert snapshot(funded, tbtc, deployer, user) == before


def test_redeem_more_than_owned(funded, tbtc, deployer):
    before = snapshot(funded, tbtc, deployer)
    with pytest.raises(AssertionError, match=ErrorsLib.InsufficientBalance):
        funded.redeem(funded.balance_of(deployer) + 1, deployer, deployer, deployer)
    assert snapshot(funded, tbtc, deployer) == before


def test_withdraw_for_another_owner_needs_allowance(funded, tbtc, deployer, user):
    before = snapshot(funded, tbtc, deployer, user)
    with pytest.raises(AssertionError, match=ErrorsLib.InsufficientAuthorization):
        funded.withdraw(ONE_TBTC // 2, user, deployer, user)
    with pytest.raises(AssertionError, match=ErrorsLib.InsufficientAuthorization):
        funded.redeem(1, user, deployer, user)
    assert snapshot(funded, tbtc, deployer, user) == before

    funded.approve(user, 5 * 10**25, deployer)
    assert funded.withdraw(ONE_TBTC // 2, user, deployer, user) == 5 * 10**25
    assert funded.allowance(deployer, user) == 0
    assert tbtc.balance_of(user) == ONE_TBTC
    assert funded.balance_of(deployer) == 5 * 10**25

    with pytest.raises(AssertionError, match=ErrorsLib.InsufficientAuthorization):
        funded.withdraw(1, user, deployer, user)


def test_infinite_share_allowance(funded, deployer, user):
    funded.approve(user, MAX_UINT256, deployer)
    funded.redeem(10**25, user, deployer, user)
    assert funded.allowance(deployer, user) == MAX_UINT256


def test_withdraw_to_zero_address(funded, tbtc, deployer):
    before = snapshot(funded, tbtc, deployer)
    with pytest.raises(AssertionError, match=ErrorsLib.ZeroAddress):
        funded.redeem(10**25, Mixer.ZERO_ADDRESS, deployer, deployer)
    assert snapshot(funded, tbtc, deployer) == before


def test_overflowing_deposit(tbtc, sats, hacker):
    before = snapshot(sats, tbtc, hacker)
    with pytest.raises(AssertionError, match=ErrorsLib.Overflow):
        sats.preview_deposit(MAX_UINT256)
    with pytest.raises(AssertionError, match=ErrorsLib.Overflow):
        sats.deposit(MAX_UINT256 // 10**8 + 1, hacker, hacker)
    with pytest.raises(AssertionError, match=ErrorsLib.ExceededMaxDeposit):
        sats.deposit(MAX_UINT256 + 1, hacker, hacker)
    assert snapshot(sats, tbtc, hacker) == before


def test_large_deposit_round_trip(tbtc, sats, hacker):
    # shares plus the virtual shares must still fit in a uint256
    assets = MAX_UINT256 // 10**9
    tbtc.mint(hacker, assets - tbtc.balance_of(hacker))
    assert sats.deposit(assets, hacker, hacker) == assets * 10**8
    assert sats.redeem(assets * 10**8, hacker, hacker, hacker) == assets
