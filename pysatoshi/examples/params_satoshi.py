class ParamsSatoshi:
    TBTC_DECIMALS = 18
    DECIMALS_OFFSET = 8

    # starting balances, in tBTC units
    USER_TBTC = 5 * 10**17
    HACKER_TBTC = 1_000 * 10**18

    # smallest deposit worth one whole SATS: 0.00000001 tBTC
    HACKER_DEPOSIT = 10**10
    DONATION = 5 * 10**17
    USER_DEPOSIT = 5 * 10**17
