class ConstantsLib:
    # 1 SATS is worth 1e-8 of the asset at genesis: 1 BTC = 100_000_000 sats
    DECIMALS_OFFSET = 8

    VIRTUAL_ASSETS = 1

    MAX_UINT256 = 2**256 - 1

    NAME = "Satoshi"
    SYMBOL = "SATS"
