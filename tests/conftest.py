"""Shared fixtures: a fresh Mixer registry, a tBTC mock and a Satoshi vault.

The deployer starts with 1 tBTC, the user with 0.5 tBTC and the hacker with
1000 tBTC.
"""

import pytest
from hypothesis import HealthCheck, settings

from pysatoshi.mocks.token import Token
from pysatoshi.satoshi.satoshi import Satoshi
from pysatoshi.utils.Mixer import Address, Mixer

ONE_TBTC = 10**18
MAX_UINT256 = 2**256 - 1

# the registry reset below is function scoped and harmless to reuse across examples
settings.register_profile("pysatoshi", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("pysatoshi")


@pytest.fixture(autouse=True)
def fresh_mixer():
    Mixer.reset()
    yield
    Mixer.reset()


@pytest.fixture
def deployer() -> Address:
    return Address.new()


@pytest.fixture
def user() -> Address:
    return Address.new()


@pytest.fixture
def hacker() -> Address:
    return Address.new()


@pytest.fixture
def tbtc(deployer, user, hacker) -> Token:
    token = Mixer.contracts_and_eoas[Token("Custom tBTC", "tBTC", 18).deploy()]
    token.mint(deployer, ONE_TBTC)
    token.mint(user, ONE_TBTC // 2)
    token.mint(hacker, 1_000 * ONE_TBTC)
    return token


@pytest.fixture
def sats(tbtc, deployer, user, hacker) -> Satoshi:
    vault = Mixer.contracts_and_eoas[Satoshi(tbtc.metadata.address).deploy()]
    for account in (deployer, user, hacker):
        tbtc.approve(vault.metadata.address, MAX_UINT256, account)
    return vault
