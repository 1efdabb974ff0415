# core/api_client.py
import time
import logging
from collections.abc import MutableMapping
from typing import Any, Dict, Optional

import requests

from .config import API_BASE_URL, BACKEND_BASE_URL, REQUEST_TIMEOUT_SECONDS
from .app_logger import log_api_call

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_KEY = "user"


class ApiError(Exception):
    """Raised for any failed call to the REST backend."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def detail(self) -> str:
        return str(self)

    def has_field_error(self, field_name: str) -> bool:
        return isinstance(self.payload, dict) and field_name in self.payload


def extract_error_detail(payload: Any, fallback: str = "") -> str:
    """
    Turns a DRF error body into a single readable line.

    {"detail": "Not found."}          -> "Not found."
    {"username": ["Already taken"]}  -> "username: Already taken"
    ["Bad value"]                    -> "Bad value"
    """
    if isinstance(payload, dict):
        if "detail" in payload:
            return str(payload["detail"])
        parts = []
        for key, value in payload.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(str(v) for v in value)
            parts.append(f"{key}: {value}")
        if parts:
            return "; ".join(parts)
    elif isinstance(payload, (list, tuple)) and payload:
        return " ".join(str(v) for v in payload)
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()[:300]
    return fallback


def fix_media_url(photo_url: Optional[str]) -> str:
    """Prefix the backend root to relative /media/ paths so the browser can load them."""
    if photo_url and photo_url.startswith("/media/"):
        return f"{BACKEND_BASE_URL}{photo_url}"
    return photo_url or ""


class SessionTokenStore(MutableMapping):
    """
    Token storage backed by st.session_state.
    Resolved lazily on every access so that importing this module never
    requires a running Streamlit session.
    """

    @staticmethod
    def _state():
        import streamlit as st
        return st.session_state

    def __getitem__(self, key):
        return self._state()[key]

    def __setitem__(self, key, value):
        self._state()[key] = value

    def __delitem__(self, key):
        del self._state()[key]

    def __iter__(self):
        return iter(list(self._state().keys()))

    def __len__(self):
        return len(self._state())


class ApiClient:
    """Thin JSON client for the marriage fund REST API."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token_store: Optional[MutableMapping] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store if token_store is not None else SessionTokenStore()
        self.timeout = timeout
        self.session = session or requests.Session()

    # ==================== TOKENS ====================
    @property
    def access_token(self) -> Optional[str]:
        return self.token_store.get(ACCESS_TOKEN_KEY)

    def set_tokens(self, access: Optional[str], refresh: Optional[str] = None):
        self.token_store[ACCESS_TOKEN_KEY] = access
        self.token_store[REFRESH_TOKEN_KEY] = refresh

    def clear_tokens(self):
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY):
            self.token_store.pop(key, None)

    # ==================== REQUESTS ====================
    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, authenticate: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.access_token if authenticate else None
        # An explicit empty header keeps a stale token from ever reaching /token/
        headers["Authorization"] = f"Bearer {token}" if token else ""
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        authenticate: bool = True,
    ) -> Any:
        url = self._url(path)
        started = time.monotonic()
        try:
            if files is not None or data is not None:
                # multipart/form-data (profile photos)
                response = self.session.request(
                    method, url, data=data, files=files, params=params,
                    headers=self._headers(authenticate), timeout=self.timeout,
                )
            else:
                response = self.session.request(
                    method, url, json=json, params=params,
                    headers=self._headers(authenticate), timeout=self.timeout,
                )
        except requests.RequestException as e:
            log_api_call(method, path, None, time.monotonic() - started)
            logger.error(f"Connection error calling {method} {path}: {e}")
            raise ApiError("Connection error. Is the backend running?") from e

        log_api_call(method, path, response.status_code, time.monotonic() - started)

        payload = self._decode(response)
        if not response.ok:
            message = extract_error_detail(payload, fallback=f"HTTP {response.status_code}")
            raise ApiError(message, status_code=response.status_code, payload=payload)
        return payload

    @staticmethod
    def _decode(response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        result = self.request("DELETE", path, **kwargs)
        # DRF answers 204 No Content; normalize to a predictable value
        return {"success": True} if result is None else result


# Create a single global instance to be used across the application
api_client = ApiClient()
