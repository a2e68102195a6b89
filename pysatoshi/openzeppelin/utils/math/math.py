from enum import Enum
from typing import Tuple


class Math:
    MAX_UINT256: int = 2**256 - 1

    MathOverflow = "Math: uint256 overflow"

    class Rounding(Enum):
        Floor = 0
        Ceil = 1

    def in_range(a: int) -> bool:
        return 0 <= a <= Math.MAX_UINT256

    def try_add(a: int, b: int) -> Tuple[bool, int]:
        c = a + b
        if not Math.in_range(c): return False, 0
        return True, c

    def try_sub(a: int, b: int) -> Tuple[bool, int]:
        if b > a: return False, 0
        return True, a - b

    def add(a: int, b: int) -> int:
        success, c = Math.try_add(a, b)
        assert success, Math.MathOverflow
        return c

    def sub(a: int, b: int) -> int:
        success, c = Math.try_sub(a, b)
        assert success, Math.MathOverflow
        return c

    def mul_div(x: int, y: int, denominator: int, rounding: Rounding = Rounding.Floor) -> int:
        """Compute ``x * y / denominator`` with full precision.

        The product is an arbitrary-precision int, so it never wraps; only the
        operands and the final quotient have to fit in a uint256.
        """
        assert Math.in_range(x) and Math.in_range(y), Math.MathOverflow
        assert 0 < denominator <= Math.MAX_UINT256, Math.MathOverflow
        result, remainder = divmod(x * y, denominator)
        if rounding == Math.Rounding.Ceil and remainder > 0: result += 1
        assert Math.in_range(result), Math.MathOverflow
        return result
