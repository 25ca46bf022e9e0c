"""
supabase_rest.py — HTTP-based database client using Supabase's PostgREST API.
Works on serverless runners without a Postgres driver. Uses only httpx.

When an access token is passed, requests run as that user so the table's
row-level security policies apply. Without one, the service role key is used.
"""
import httpx
from urllib.parse import quote

import config


def _client() -> httpx.Client:
    return httpx.Client(timeout=10)


def _headers(access_token: str = None):
    if access_token:
        api_key = config.SUPABASE_ANON_KEY or config.SUPABASE_SERVICE_ROLE_KEY
        bearer = access_token
    else:
        api_key = config.SUPABASE_SERVICE_ROLE_KEY
        bearer = config.SUPABASE_SERVICE_ROLE_KEY
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {bearer}",
        "Content-Type": "application/json",
        "Prefer": "return=representation",
    }


def _filter_params(filters: dict = None) -> str:
    """Render equality filters as PostgREST query parameters."""
    parts = []
    for key, value in (filters or {}).items():
        if value is None:
            parts.append(f"{key}=is.null")
        else:
            parts.append(f"{key}=eq.{quote(str(value))}")
    return "&".join(parts)


def _table_url(table: str, query: str = "") -> str:
    url = f"{config.SUPABASE_URL}/rest/v1/{table}"
    return f"{url}?{query}" if query else url


def sb_select(table: str, filters: dict = None, columns: str = "*", order: str = None,
              access_token: str = None) -> list:
    """Select rows from a table with optional equality filters and ordering (e.g. 'created_at.desc')."""
    query = f"select={columns}"
    params = _filter_params(filters)
    if params:
        query += f"&{params}"
    if order:
        query += f"&order={order}"

    with _client() as client:
        resp = client.get(_table_url(table, query), headers=_headers(access_token))
        resp.raise_for_status()
        return resp.json()


def sb_insert(table: str, data: dict, access_token: str = None) -> dict:
    """Insert a row and return the created record."""
    with _client() as client:
        resp = client.post(_table_url(table), json=data, headers=_headers(access_token))
        resp.raise_for_status()
        result = resp.json()
        return result[0] if isinstance(result, list) and result else {}


def sb_update(table: str, filters: dict, data: dict, access_token: str = None) -> list:
    """Update rows matching the filters and return the updated records."""
    if not filters:
        raise ValueError("sb_update requires at least one filter")
    with _client() as client:
        resp = client.patch(_table_url(table, _filter_params(filters)), json=data,
                            headers=_headers(access_token))
        resp.raise_for_status()
        result = resp.json()
        return result if isinstance(result, list) else []


def sb_delete(table: str, filters: dict, access_token: str = None) -> int:
    """Delete rows matching the filters. Returns the number of deleted rows."""
    if not filters:
        raise ValueError("sb_delete requires at least one filter")
    with _client() as client:
        resp = client.delete(_table_url(table, _filter_params(filters)), headers=_headers(access_token))
        resp.raise_for_status()
        try:
            result = resp.json()
        except ValueError:
            return 0
        return len(result) if isinstance(result, list) else 0
