# core/query_cache.py
import time
import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Optional, Tuple

from .config import QUERY_STALE_SECONDS

logger = logging.getLogger(__name__)

CACHE_STATE_KEY = "query_cache"

# Query keys shared by pages and mutations
PAYMENTS = "payments"
AVAILABLE_MEMBERS = "availableMembers"
USERS = "users"
ALL_USERS_PUBLIC = "allUsersPublic"
DASHBOARD_STATS = "dashboardStats"
RECENT_REQUESTS = "recentRequests"
FUND_REQUESTS = "fundRequests"
TEAM_STRUCTURE = "teamStructure"
NOTIFICATIONS = "notifications"
WALLET_TRANSACTIONS = "walletTransactions"

ServiceResult = Tuple[bool, str, Any]


class QueryCache:
    """
    Per-session cache of service results.
    Entries are kept in the session so one user's data is never served to another.
    """

    def __init__(
        self,
        store: Optional[MutableMapping] = None,
        stale_seconds: float = QUERY_STALE_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self.stale_seconds = stale_seconds
        self.clock = clock

    def _entries(self) -> dict:
        store = self._store
        if store is None:
            import streamlit as st
            store = st.session_state
        if CACHE_STATE_KEY not in store:
            store[CACHE_STATE_KEY] = {}
        return store[CACHE_STATE_KEY]

    def fetch(self, key: str, loader: Callable[[], ServiceResult]) -> ServiceResult:
        """Return fresh cached data for key, or call the loader and cache a successful result."""
        entries = self._entries()
        entry = entries.get(key)
        if entry and self.clock() - entry["fetched_at"] < self.stale_seconds:
            return True, "cached", entry["data"]

        success, message, data = loader()
        if success:
            entries[key] = {"data": data, "fetched_at": self.clock()}
        else:
            logger.warning(f"Query '{key}' failed: {message}")
        return success, message, data

    def invalidate(self, *keys: str):
        entries = self._entries()
        for key in keys:
            entries.pop(key, None)

    def clear(self):
        self._entries().clear()


# Create a single global instance to be used across the application
query_cache = QueryCache()
