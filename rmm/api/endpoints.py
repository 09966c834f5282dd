"""API endpoints for the replicating market maker core."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from rmm.amm.replication import ReplicationAMM, parse_replication_pool
from rmm.errors import RmmError, UnknownTokenError
from rmm.models.pool import (
    InvariantRequest,
    InvariantResponse,
    QuoteKind,
    QuoteRequest,
    QuoteResponse,
)
from rmm.models.types import normalize_address
from rmm.safe_int import SafeIntError

logger = structlog.get_logger()

router = APIRouter()

_default_amm = ReplicationAMM()


def get_amm() -> ReplicationAMM:
    """Dependency provider for the AMM instance.

    Override this in tests to inject a custom configuration:
        app.dependency_overrides[get_amm] = lambda: ReplicationAMM(config)
    """
    return _default_amm


def _reject(err: Exception) -> HTTPException:
    """Map a core failure to a 422 response carrying the error kind."""
    return HTTPException(
        status_code=422,
        detail={"message": str(err), "error": type(err).__name__},
    )


@router.post("/invariant", response_model_by_alias=True)
def invariant(
    request: InvariantRequest,
    amm: ReplicationAMM = Depends(get_amm),
) -> InvariantResponse:
    """Evaluate the trading function for a pool snapshot.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - Domain or arithmetic failure: 422 with the error class name
    """
    try:
        pool = parse_replication_pool(request.pool)
        value = amm.invariant(pool, request.timestamp)
    except (RmmError, SafeIntError) as err:
        logger.warning("invariant_failed", pool_id=request.pool.id, error=str(err))
        raise _reject(err) from err

    return InvariantResponse(invariant=str(value.value), invariant_decimal=str(value))


@router.post("/quote", response_model_by_alias=True)
def quote(
    request: QuoteRequest,
    amm: ReplicationAMM = Depends(get_amm),
) -> QuoteResponse:
    """Quote a swap against a pool snapshot.

    A sell quote fixes the input and returns the output; a buy quote fixes
    the output and returns the required input. limitAmount is the minimum
    output (sell) or maximum input (buy).

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - Trade not executable (domain, invariant, limit, arithmetic): 422
          with the error class name
    """
    logger.info(
        "received_quote_request",
        pool_id=request.pool.id,
        kind=request.kind.value,
        token_in=request.token_in,
        token_out=request.token_out,
        amount=request.amount,
    )

    try:
        pool = parse_replication_pool(request.pool)
        token_in = normalize_address(request.token_in)
        token_out = normalize_address(request.token_out)
        if token_in == token_out or {token_in, token_out} != {
            pool.risky_token,
            pool.stable_token,
        }:
            raise UnknownTokenError(f"Pair {token_in}/{token_out} does not match pool {pool.id}")

        limit = int(request.limit_amount) if request.limit_amount is not None else None
        if request.kind == QuoteKind.SELL:
            result = amm.simulate_swap(
                pool,
                token_in,
                int(request.amount),
                request.timestamp,
                min_amount_out=limit or 0,
            )
        else:
            result = amm.simulate_swap_exact_output(
                pool,
                token_out,
                int(request.amount),
                request.timestamp,
                max_amount_in=limit,
            )
    except (RmmError, SafeIntError) as err:
        logger.warning(
            "quote_failed",
            pool_id=request.pool.id,
            error_type=type(err).__name__,
            error=str(err),
        )
        raise _reject(err) from err

    return QuoteResponse(
        amount_in=str(result.amount_in),
        amount_out=str(result.amount_out),
        invariant_before=str(result.invariant_before.value),
        invariant_after=str(result.invariant_after.value),
        fee_growth=str(result.fee_growth.value),
    )
