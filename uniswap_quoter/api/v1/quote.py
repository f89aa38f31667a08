"""
Quote Endpoints

Exact-input and exact-output quotes for a native/token pool described by a
QuoteRequest.
"""
from fastapi import APIRouter, HTTPException

from ..schemas import QuoteRequest, QuoteResponse, ErrorResponse
from ...exceptions import QuoterError
from ...quoter import quote, encode_uint256

router = APIRouter()


def _run_quote(request: QuoteRequest, exact_input: bool) -> QuoteResponse:
    try:
        pool = request.build_pool()
        result = quote(pool, request.specified_currency(), request.raw_amount, exact_input)
    except QuoterError as e:
        raise HTTPException(status_code=400, detail=f"{type(e).__name__}: {e}")

    return QuoteResponse(
        amount=str(result.amount),
        encoded="0x" + encode_uint256(result.amount).hex(),
        exact_input=exact_input,
        zero_for_one=result.zero_for_one,
        sqrt_price_x96_after=str(result.pool_after.sqrt_price_x96),
        tick_after=result.pool_after.tick,
        mid_price_after=result.pool_after.mid_price,
    )


@router.post(
    "/quote/exact-input",
    response_model=QuoteResponse,
    responses={400: {"model": ErrorResponse}}
)
async def quote_exact_input(request: QuoteRequest):
    """
    Output amount for paying exactly `raw_amount` of `currency_address`
    """
    return _run_quote(request, exact_input=True)


@router.post(
    "/quote/exact-output",
    response_model=QuoteResponse,
    responses={400: {"model": ErrorResponse}}
)
async def quote_exact_output(request: QuoteRequest):
    """
    Input amount required to receive exactly `raw_amount` of `currency_address`
    """
    return _run_quote(request, exact_input=False)
