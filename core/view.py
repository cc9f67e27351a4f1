"""Account list rendering for the front ends.

All display state lives in an immutable ViewState that callers replace
instead of mutating. render() is a pure function of the account list and
that state, so the CLI and the GUI produce the same rows for the same
inputs.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

from .base32 import DecodeError
from .totp import GenerationError, compute_totp, seconds_remaining

PAGE_SIZE = 5
PLACEHOLDER_CODE = "------"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    """What the user is looking at, and when it was last refreshed."""

    page: int = 0
    query: str = ""
    refreshed_at: float = 0.0

    def with_query(self, query: str) -> "ViewState":
        # New search results start on the first page
        return dataclasses.replace(self, query=query, page=0)

    def with_page(self, page: int) -> "ViewState":
        return dataclasses.replace(self, page=max(page, 0))

    def refreshed(self, now: float) -> "ViewState":
        return dataclasses.replace(self, refreshed_at=now)


@dataclass(frozen=True)
class AccountRow:
    index: int  # position in the stored list
    name: str
    code: str


@dataclass(frozen=True)
class RenderedView:
    rows: tuple
    page: int
    page_count: int
    seconds_remaining: int
    empty_message: Optional[str] = None


def filter_accounts(accounts: list, query: str) -> list:
    """Get (index, account) pairs whose name contains the query.

    Matching is case-insensitive. Indices refer to the unfiltered list.
    """
    needle = query.strip().casefold()
    return [
        (index, account)
        for index, account in enumerate(accounts)
        if needle in account.get("name", "").casefold()
    ]


def code_for(account: dict, now: float) -> str:
    """Get the code for an account, or the placeholder if it cannot be made."""
    try:
        return compute_totp(account.get("secret", ""), now)
    except (DecodeError, GenerationError) as e:
        log.debug("No code for '%s': %s", account.get("name", ""), e)
        return PLACEHOLDER_CODE


def render(accounts: list, state: ViewState, page_size: int = PAGE_SIZE) -> RenderedView:
    """Build the rows visible for a view state.

    Args:
        accounts: Full stored account list
        state: Current page, search query and refresh time
        page_size: Rows per page

    Returns:
        RenderedView with the page clamped to the available range
    """
    matches = filter_accounts(accounts, state.query)
    page_count = max(1, -(-len(matches) // page_size))
    page = min(max(state.page, 0), page_count - 1)
    visible = matches[page * page_size:(page + 1) * page_size]

    rows = tuple(
        AccountRow(index=index, name=account.get("name", ""), code=code_for(account, state.refreshed_at))
        for index, account in visible
    )

    empty_message = None
    if not accounts:
        empty_message = "No accounts yet. Add one to get started."
    elif not matches:
        empty_message = f"No accounts match '{state.query.strip()}'."

    return RenderedView(
        rows=rows,
        page=page,
        page_count=page_count,
        seconds_remaining=seconds_remaining(state.refreshed_at),
        empty_message=empty_message,
    )
