from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any
from enum import Enum
from eth_abi import encode
from eth_utils import keccak
import copy
import logging
import threading

logger = logging.getLogger(__name__)


class ChainID(Enum):
    ETH_MAINNET = 1
    ETH_SEPOLIA = 11155111


class InstanceType(Enum):
    EOA = 0
    CONTRACT = 1


class Address(str):
    ADDRESS_SALT: int = 0

    ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"

    def __new__(cls, x: object):
        if hasattr(x, "metadata"):
            x = str(x.metadata.address)
        elif not isinstance(x, str):
            raise ValueError("Address must be either a string or a contract.")
        return super().__new__(cls, x.lower())

    @property
    def address(self) -> str:
        return str.__str__(self)

    @staticmethod
    def new(chain: ChainID = ChainID.ETH_MAINNET) -> "Address":
        Address.ADDRESS_SALT = Address.ADDRESS_SALT + 1
        digest = keccak(
            encode(
                ["bytes32", "uint256"],
                [bytes(str(chain), "utf-8"), Address.ADDRESS_SALT],
            )
        )
        return Address(f"0x{digest.hex()[:40]}")


@dataclass
class Metadata:
    chain: ChainID = ChainID.ETH_MAINNET
    address: Address = Address(Address.ZERO_ADDRESS)
    name: str = "Unnamed"
    type: InstanceType = InstanceType.EOA


class Mixer:
    contracts_and_eoas: dict[Address, Any] = {}
    ZERO_ADDRESS = Address(Address.ZERO_ADDRESS)

    _lock = threading.RLock()
    _depth: int = 0

    def register(thingy: Any) -> Address:
        final_address = (
            Address.new(thingy.metadata.chain)
            if (
                thingy.metadata.address == Address.ZERO_ADDRESS
                or thingy.metadata.address in Mixer.contracts_and_eoas.keys()
            )
            else Address(thingy.metadata.address)
        )

        Mixer.contracts_and_eoas[final_address] = thingy
        return final_address

    def reset():
        with Mixer._lock:
            Mixer.contracts_and_eoas.clear()
            Mixer._depth = 0

    @contextmanager
    def transaction():
        """Run a state-changing call as one all-or-nothing unit.

        Calls are serialised by a re-entrant lock, so a contract may call back
        into another while it holds it. Every registered contract's state is
        snapshotted on entry and restored if an exception escapes, mimicking a
        reverted EVM call frame; the exception is then re-raised untouched.
        """
        with Mixer._lock:
            snapshot = Mixer._snapshot()
            Mixer._depth += 1
            try:
                yield
            except BaseException as exc:
                Mixer._restore(snapshot)
                logger.debug("reverted at depth %d: %r", Mixer._depth, exc)
                raise
            finally:
                Mixer._depth -= 1

    @contextmanager
    def view():
        """Hold the call lock while reading, so a read never lands inside
        another thread's in-flight call."""
        with Mixer._lock:
            yield

    def _snapshot() -> dict[Address, dict]:
        # contracts reference each other by address, but hooks may hold live
        # objects: keep registered instances shared instead of cloning them
        memo = {id(thingy): thingy for thingy in Mixer.contracts_and_eoas.values()}
        return {
            address: copy.deepcopy(vars(thingy), memo)
            for address, thingy in Mixer.contracts_and_eoas.items()
        }

    def _restore(snapshot: dict[Address, dict]):
        for address, state in snapshot.items():
            thingy = Mixer.contracts_and_eoas.get(address)
            if thingy is None:
                continue
            vars(thingy).clear()
            vars(thingy).update(state)
