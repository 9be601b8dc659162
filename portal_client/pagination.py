"""Pagination state for list screens.

Some list endpoints report ``total``/``totalPages`` and some do not. ``reconcile``
turns one fetched page into a (total items, total pages) pair, trusting the
server when it reports counts and estimating otherwise. ``PagedList`` keeps
that decision per screen so totals do not flicker between page turns.

Counting probe: when page 1 comes back full and without totals, ``PagedList``
issues a single extra request for ``probe_limit`` rows to learn the real size.
This is a fallback for endpoints that omit counts; set the probe limit to 0 to
turn it off and rely on the conservative estimate alone.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
import threading
from typing import Callable

from portal_client.envelope import Empty, Items
from portal_client.errors import PortalApiError

logger = logging.getLogger(__name__)

Fetcher = Callable[[int, int], "Items | Empty"]


@dataclass(frozen=True)
class PageWindow:
    total_items: int
    total_pages: int
    is_authoritative: bool


def page_count(total_items: int, page_size: int) -> int:
    return max(1, math.ceil(total_items / page_size))


def estimate(page_size: int, page: int, items_returned: int) -> PageWindow:
    if items_returned > page_size:
        # The endpoint ignored the limit and sent the whole collection.
        return PageWindow(items_returned, page_count(items_returned, page_size), False)
    if items_returned < page_size:
        total_items = (page - 1) * page_size + items_returned
        return PageWindow(total_items, max(1, page), False)
    # A full page: assume at least one more record exists.
    return PageWindow(page * page_size + 1, page + 1, False)


def reconcile(
    page_size: int,
    page: int,
    items_returned: int,
    server_total: int | None = None,
    server_total_pages: int | None = None,
) -> PageWindow:
    if page_size < 1:
        raise ValueError("page_size must be 1 or greater")
    if page < 1:
        raise ValueError("page must be 1 or greater")

    if server_total is not None:
        return PageWindow(server_total, page_count(server_total, page_size), True)

    if server_total_pages is not None:
        total_pages = max(1, server_total_pages)
        if page < total_pages:
            total_items = total_pages * page_size
        else:
            total_items = max((total_pages - 1) * page_size + items_returned, items_returned)
        return PageWindow(total_items, total_pages, True)

    return estimate(page_size, page, items_returned)


class PaginationMode(Enum):
    UNDETERMINED = "undetermined"
    AUTHORITATIVE = "authoritative"
    ESTIMATED = "estimated"
    CLIENT = "client"


@dataclass
class PaginationState:
    page_size: int
    page: int = 1
    total_items: int = 0
    total_pages: int = 1
    mode: PaginationMode = PaginationMode.UNDETERMINED
    probed_total: int | None = None
    probe_attempted: bool = False

    @property
    def is_authoritative(self) -> bool:
        return self.mode is PaginationMode.AUTHORITATIVE

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class PagedList:
    """Pagination controller for one list screen.

    The first successful fetch fixes the mode for the life of the controller
    (until ``reset``): AUTHORITATIVE when the server reported counts, CLIENT
    when it ignored the limit and returned the whole collection, ESTIMATED
    otherwise.

    Loads are serialized, so a refresh issued while another page is loading
    waits for it instead of racing it.
    """

    def __init__(self, fetch: Fetcher, page_size: int = 10, probe_limit: int = 1000):
        if page_size < 1:
            raise ValueError("page_size must be 1 or greater")
        self._fetch = fetch
        self._probe_limit = probe_limit
        self._collection: list | None = None
        self._lock = threading.RLock()
        self.state = PaginationState(page_size=page_size)
        self.items: list = []

    @property
    def page_size(self) -> int:
        return self.state.page_size

    def reset(self) -> None:
        with self._lock:
            self.state = PaginationState(page_size=self.state.page_size)
            self._collection = None
            self.items = []

    def refresh(self) -> PaginationState:
        with self._lock:
            self._collection = None
            return self._load(self.state.page)

    def next_page(self) -> PaginationState:
        with self._lock:
            return self._load(self.state.page + 1)

    def previous_page(self) -> PaginationState:
        with self._lock:
            return self._load(max(1, self.state.page - 1))

    def load(self, page: int) -> PaginationState:
        with self._lock:
            return self._load(page)

    def _load(self, page: int) -> PaginationState:
        page = max(1, page)
        state = self.state
        if state.mode is PaginationMode.CLIENT and self._collection is not None:
            return self._show_client_page(page)

        result = self._fetch(page, state.page_size)
        returned = len(result.items)

        if state.mode is PaginationMode.UNDETERMINED:
            if result.is_authoritative:
                state.mode = PaginationMode.AUTHORITATIVE
            elif returned > state.page_size:
                state.mode = PaginationMode.CLIENT
            else:
                state.mode = PaginationMode.ESTIMATED
            logger.debug("Pagination mode determined: %s", state.mode.value)

        if state.mode is PaginationMode.CLIENT:
            self._collection = list(result.items)
            return self._show_client_page(page)

        if state.mode is PaginationMode.AUTHORITATIVE:
            window = self._authoritative_window(page, returned, result)
        else:
            window = self._estimated_window(page, returned)

        state.page = page
        state.total_items = window.total_items
        state.total_pages = max(1, window.total_pages)
        self.items = list(result.items)
        return state

    def _show_client_page(self, page: int) -> PaginationState:
        state = self.state
        collection = self._collection or []
        state.total_items = len(collection)
        state.total_pages = page_count(len(collection), state.page_size)
        state.page = min(page, state.total_pages)
        start = (state.page - 1) * state.page_size
        self.items = collection[start:start + state.page_size]
        return state

    def _authoritative_window(self, page: int, returned: int, result: Items | Empty) -> PageWindow:
        if result.is_authoritative:
            return reconcile(self.state.page_size, page, returned, result.reported_total, result.reported_pages)
        # Server stopped reporting counts mid-session; keep the last known totals.
        return PageWindow(
            max(self.state.total_items, (page - 1) * self.state.page_size + returned),
            max(self.state.total_pages, page),
            True,
        )

    def _estimated_window(self, page: int, returned: int) -> PageWindow:
        page_size = self.state.page_size
        window = estimate(page_size, page, returned)

        if returned == page_size and page == 1 and not self.state.probe_attempted:
            self.state.probe_attempted = True
            self.state.probed_total = self._probe_total()

        probed = self.state.probed_total
        if probed is not None and returned == page_size and probed >= page * page_size:
            return PageWindow(probed, page_count(probed, page_size), False)
        return window

    def _probe_total(self) -> int | None:
        if self._probe_limit <= 0:
            return None
        try:
            probe = self._fetch(1, self._probe_limit)
        except PortalApiError as exc:
            logger.info("Counting probe failed, keeping estimated totals: %s", exc)
            return None
        if probe.reported_total is not None:
            return probe.reported_total
        if len(probe.items) < self._probe_limit:
            logger.info("Counting probe found %d records", len(probe.items))
            return len(probe.items)
        return None
