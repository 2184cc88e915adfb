"""
Read, add, and replace quotes.
"""

from fastapi import APIRouter, Request, Response, Query

from typing import Optional

from quotebox.models import Quote, QuoteIn
from quotebox.service import QuoteService
from quotebox.storage import (
    Pagination, MAX_PAGINATION_SIZE, MAX_PAGINATION_PAGE, DEFAULT_PAGINATION_SIZE
)
from quotebox.core.responses import respond

PAGINATION_PAGE_HEADER = 'X-Pagination-Page'
PAGINATION_SIZE_HEADER = 'X-Pagination-Size'
PAGINATION_COUNT_HEADER = 'X-Pagination-Count'
PAGINATION_PAGE_PARAM = 'pagination-page'
PAGINATION_SIZE_PARAM = 'pagination-size'

router = APIRouter(tags=['quotes'])


def get_service(request: Request) -> QuoteService:
    return request.app.service


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def read_pagination(page: Optional[str], size: Optional[str]) -> Pagination:
    """
    Build a Pagination from raw query parameters.
    Garbage falls back to the defaults and the size is capped.
    """
    page = _parse_int(page, 1)
    size = _parse_int(size, DEFAULT_PAGINATION_SIZE)

    if page < 1:
        page = 1

    # Nothing lives that far out anyway
    if page > MAX_PAGINATION_PAGE:
        page = MAX_PAGINATION_PAGE

    if size < 1:
        size = DEFAULT_PAGINATION_SIZE

    # Prevent too many results from being returned
    if size > MAX_PAGINATION_SIZE:
        size = MAX_PAGINATION_SIZE

    return Pagination(page=page, size=size)


def write_pagination(response: Response, pagination: Pagination, count: int):
    response.headers[PAGINATION_PAGE_HEADER] = str(pagination.page)
    response.headers[PAGINATION_SIZE_HEADER] = str(pagination.size)
    response.headers[PAGINATION_COUNT_HEADER] = str(count)


@router.get('/quotes')
def get_quotes(
        request: Request,
        response: Response,
        page: Optional[str] = Query(default=None, alias=PAGINATION_PAGE_PARAM),
        size: Optional[str] = Query(default=None, alias=PAGINATION_SIZE_PARAM),
) -> list[Quote]:
    """
    List the quotes one page at a time.
    The page, page size and total amount of quotes are sent back in the `X-Pagination-*` headers.
    """
    pagination = read_pagination(page, size)
    quotes, count = get_service(request).get_quotes(pagination)

    write_pagination(response, pagination, count)
    return quotes


@router.post('/quotes', status_code=201)
def add_quote(request: Request, quote: QuoteIn) -> Quote:
    """Add a single quote. Requires the authorization key."""
    if not quote.text:
        return respond('empty_text')

    return get_service(request).add_quote(quote)


@router.put('/quotes', status_code=201)
def set_quotes(request: Request, quotes: list[QuoteIn]) -> list[Quote]:
    """
    Replace the entire collection with the given quotes. Requires the authorization key.
    Every quote gets a new ID.
    """
    return get_service(request).set_quotes(quotes)


@router.get('/random-quote')
def random_quote(request: Request) -> Quote:
    """Get a quote picked at random"""
    return get_service(request).random_quote()
