"""Quote configuration for the replicating market maker."""

from dataclasses import dataclass

from rmm.math.fixed_point import Fp


@dataclass(frozen=True)
class QuoteConfig:
    """Centralized configuration for swap quoting.

    Attributes:
        invariant_tolerance: How far (in real terms) the post-trade invariant
            may fall below the pre-trade invariant before the quote is
            rejected. Covers rounding in the curve round trip only; fees
            always push the invariant up.
        reject_expired: If True, pools at or past maturity refuse to quote.
            If False, they quote on the terminal payoff line (tau == 0).
    """

    invariant_tolerance: Fp = Fp.from_decimal("0.000000001")
    reject_expired: bool = False


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()
