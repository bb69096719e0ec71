"""
Supabase REST Client
====================

Thin client for the PostgREST API exposed by a hosted Supabase project.
Only the calls OrderDesk needs: filtered selects and single-table updates.

Filters use PostgREST syntax, e.g. {'order_id': 'eq.42'} or
{'or': '(customer_name.ilike."*ana*",order_id.eq.42)'}.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .exceptions import BackendError

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

# Characters with a meaning inside PostgREST logic trees
_RESERVED = set(',.:()"\\ ')


def quote_value(value) -> str:
    """Quote a value for use inside an or=(...)/and=(...) logic tree."""
    text = str(value)
    if text and not any(ch in _RESERVED for ch in text):
        return text
    escaped = text.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def in_list(values) -> str:
    """Render values for the in. operator: (a,b,c)"""
    return "(" + ",".join(quote_value(v) for v in values) + ")"


class SupabaseClient:
    """Client for one Supabase project (URL + API key)"""

    def __init__(self, url: str, api_key: str, timeout: float = 15,
                 session: Optional[requests.Session] = None):
        self.base_url = (url or "").rstrip("/") + REST_PATH
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.api_key or ''}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(self, method: str, table: str, params: List[tuple],
                 json_body: Any = None, prefer: Optional[str] = None):
        url = f"{self.base_url}/{table}"
        logger.debug("Supabase %s %s %s", method, table, params)

        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BackendError(f"Backend request failed: {e}") from e

        if not resp.ok:
            raise BackendError(
                self._error_message(resp),
                status_code=resp.status_code,
                details=resp.text,
            )

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError("Backend returned invalid JSON", status_code=resp.status_code) from e

    @staticmethod
    def _error_message(resp) -> str:
        """PostgREST errors are JSON objects with a 'message' field"""
        try:
            data = resp.json()
        except ValueError:
            return resp.text or f"HTTP {resp.status_code}"
        if isinstance(data, dict):
            return data.get("message") or data.get("error") or data.get("msg") or f"HTTP {resp.status_code}"
        return f"HTTP {resp.status_code}"

    def select(self, table: str, columns: str = "*", filters: Optional[Dict[str, str]] = None,
               order: Optional[str] = None, limit: Optional[int] = None,
               offset: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Select rows from a table.

        Args:
            table: Table name
            columns: Comma separated column list
            filters: Mapping of column (or 'or'/'and') to PostgREST filter value
            order: Order clause, e.g. 'created_at.desc'
            limit: Max rows
            offset: Rows to skip

        Returns:
            List of row dicts
        """
        params = [("select", columns)]
        for key, value in (filters or {}).items():
            params.append((key, value))
        if order:
            params.append(("order", order))
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset:
            params.append(("offset", str(offset)))

        rows = self._request("GET", table, params)
        return rows or []

    def update(self, table: str, values: Dict[str, Any], filters: Dict[str, str]) -> None:
        """PATCH rows matching filters. An unfiltered update is refused."""
        if not filters:
            raise ValueError("update() requires at least one filter")
        params = list(filters.items())
        self._request("PATCH", table, params, json_body=values, prefer="return=minimal")

    def ping(self, table: str) -> bool:
        """Cheap reachability check used by /health"""
        self.select(table, columns="*", limit=1)
        return True
