"""Pydantic models for replicating pool state and quote requests.

The orchestrator owns pool state; these models describe the snapshot it
sends with every request. All amounts are raw integers in the token's
native decimals, encoded as decimal strings.
"""

from enum import Enum

from pydantic import BaseModel, Field

from rmm.constants import MAX_TOKEN_DECIMALS, PERCENTAGE
from rmm.models.types import Address, Int128, Uint256


class TokenInfo(BaseModel):
    """One of the pool's two assets."""

    address: Address
    decimals: int = Field(default=18, ge=0, le=MAX_TOKEN_DECIMALS)
    symbol: str | None = None


class PoolState(BaseModel):
    """Snapshot of a replicating pool as persisted by the orchestrator."""

    id: str = Field(description="Pool identifier")
    risky: TokenInfo
    stable: TokenInfo
    reserve_risky: Uint256 = Field(alias="reserveRisky")
    reserve_stable: Uint256 = Field(alias="reserveStable")
    liquidity: Uint256 = Field(description="Outstanding liquidity shares (18 decimals)")
    strike: Uint256 = Field(description="Strike price in stable token units per risky unit")
    sigma: int = Field(gt=0, description="Implied volatility in basis points")
    maturity: int = Field(ge=0, description="Maturity as unix timestamp (seconds)")
    fee: int = Field(
        default=0,
        ge=0,
        lt=PERCENTAGE,
        description="Swap fee in basis points",
    )
    invariant_last: Int128 = Field(
        default="0",
        alias="invariantLast",
        description="Last recorded invariant as raw 64.64 fixed-point",
    )

    model_config = {"populate_by_name": True}


class QuoteKind(str, Enum):
    """Whether the quoted amount is the input or the output."""

    SELL = "sell"  # exact input
    BUY = "buy"  # exact output


class QuoteRequest(BaseModel):
    """Request to quote a swap against a pool snapshot."""

    pool: PoolState
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    kind: QuoteKind = QuoteKind.SELL
    amount: Uint256 = Field(description="Input amount for sell, output amount for buy")
    timestamp: int = Field(ge=0, description="Current time as unix timestamp (seconds)")
    limit_amount: Uint256 | None = Field(
        default=None,
        alias="limitAmount",
        description="Minimum output for sell, maximum input for buy",
    )

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    """Quoted swap amounts and the invariant movement they cause."""

    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    invariant_before: Int128 = Field(alias="invariantBefore")
    invariant_after: Int128 = Field(alias="invariantAfter")
    fee_growth: Int128 = Field(alias="feeGrowth")

    model_config = {"populate_by_name": True}


class InvariantRequest(BaseModel):
    """Request to evaluate the trading function for a pool snapshot."""

    pool: PoolState
    timestamp: int = Field(ge=0)


class InvariantResponse(BaseModel):
    """Invariant as raw 64.64 and as a decimal string."""

    invariant: Int128
    invariant_decimal: str = Field(alias="invariantDecimal")

    model_config = {"populate_by_name": True}
