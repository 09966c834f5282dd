"""Base classes for AMM implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from rmm.math.fixed_point import Fp


@dataclass(frozen=True)
class SwapResult:
    """Result of simulating a swap through an AMM.

    Amounts are raw integers in each token's native decimals.
    """

    amount_in: int
    amount_out: int
    pool_id: str
    token_in: str
    token_out: str
    invariant_before: Fp
    invariant_after: Fp

    @property
    def fee_growth(self) -> Fp:
        """Invariant increase contributed by the fee."""
        return self.invariant_after - self.invariant_before


class AMM(ABC):
    """Abstract base class for AMM implementations.

    Implementations are stateless: the pool snapshot and the current
    timestamp are passed with every call, and nothing is mutated.
    """

    @abstractmethod
    def simulate_swap(
        self,
        pool: Any,
        token_in: str,
        amount_in: int,
        timestamp: int,
    ) -> SwapResult:
        """Simulate selling an exact input amount.

        Args:
            pool: Pool snapshot
            token_in: Token being sold
            amount_in: Input amount in token decimals
            timestamp: Current unix time in seconds

        Returns:
            SwapResult with the output amount
        """
        ...

    @abstractmethod
    def simulate_swap_exact_output(
        self,
        pool: Any,
        token_out: str,
        amount_out: int,
        timestamp: int,
    ) -> SwapResult:
        """Simulate buying an exact output amount.

        Args:
            pool: Pool snapshot
            token_out: Token being bought
            amount_out: Output amount in token decimals
            timestamp: Current unix time in seconds

        Returns:
            SwapResult with the required input amount
        """
        ...
