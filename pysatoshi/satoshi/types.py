from dataclasses import dataclass


@dataclass
class PoolState:
    # assets credited through deposit/mint and debited through withdraw/redeem,
    # never the raw asset balance held by the vault
    tracked_assets: int = 0
    total_shares: int = 0
