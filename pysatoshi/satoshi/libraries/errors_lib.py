from pysatoshi.openzeppelin.utils.math.math import Math


class ErrorsLib:
    ZeroAssets = "ZERO_ASSETS"
    ZeroShares = "ZERO_SHARES"
    ZeroAddress = "zero address"
    InsufficientBalance = "insufficient balance"
    InsufficientAuthorization = "insufficient authorization"
    Overflow = Math.MathOverflow
    ExceededMaxDeposit = "ERC4626: deposit more than max"
    ExceededMaxMint = "ERC4626: mint more than max"
    InconsistentPoolState = "inconsistent pool state"
