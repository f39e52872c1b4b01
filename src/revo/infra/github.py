from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter

from ..core.domain.exceptions import MetadataUnavailableError


logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
RAW_BASE = "https://raw.githubusercontent.com"
ACCEPT_HEADER = "application/vnd.github.v3+json"


class GitHubClient:
    """Minimal GitHub REST client for repository sampling.

    Uses one ``requests.Session`` whose connection pool is sized to the run's
    concurrency. No retries are configured; a failed lookup returns None.
    """

    def __init__(
        self,
        *,
        token: Optional[str] = None,
        api_base: str = API_BASE,
        raw_base: str = RAW_BASE,
        pool_size: int = 4,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_base = api_base.rstrip("/")
        self._raw_base = raw_base.rstrip("/")
        self._timeout = timeout
        self._headers = {"Accept": ACCEPT_HEADER}
        if token:
            self._headers["Authorization"] = f"token {token}"

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=2, pool_maxsize=max(pool_size, 1), max_retries=0)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def get_repository(self, owner: str, name: str) -> Dict[str, Any]:
        slug = f"{owner}/{name}"
        try:
            resp = self._session.get(f"{self._api_base}/repos/{slug}", headers=self._headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise MetadataUnavailableError(slug, message=f"GitHub metadata fetch failed: {e}") from e
        if resp.status_code != 200:
            raise MetadataUnavailableError(slug, status=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise MetadataUnavailableError(slug, message="GitHub metadata response was not JSON") from e
        if not isinstance(data, dict):
            raise MetadataUnavailableError(slug, message="GitHub metadata response was not an object")
        return data

    def get_tree(self, owner: str, name: str, ref: str) -> Optional[Dict[str, Any]]:
        url = f"{self._api_base}/repos/{owner}/{name}/git/trees/{quote(ref, safe='/')}"
        return self._get_json(url, params={"recursive": "1"})

    def get_commit(self, owner: str, name: str, ref: str) -> Optional[Dict[str, Any]]:
        url = f"{self._api_base}/repos/{owner}/{name}/commits/{quote(ref, safe='/')}"
        return self._get_json(url)

    def get_raw_file(self, owner: str, name: str, branch: str, path: str) -> Optional[str]:
        url = f"{self._raw_base}/{owner}/{name}/{quote(branch, safe='/')}/{quote(path, safe='/')}"
        # raw host takes the token but not the API Accept header
        headers = {k: v for k, v in self._headers.items() if k == "Authorization"}
        resp = self._session.get(url, headers=headers, timeout=self._timeout)
        if resp.status_code != 200:
            return None
        return resp.text

    def close(self) -> None:
        self._session.close()

    def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Optional[Dict[str, Any]]:
        try:
            resp = self._session.get(url, headers=self._headers, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            logger.debug("GitHub request failed: %s (%s)", url, e)
            return None
        if resp.status_code != 200:
            logger.debug("GitHub request returned %s: %s", resp.status_code, url)
            return None
        try:
            data = resp.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None


class GitHubClientFactory:
    """Builds one GitHubClient per run; the per-run token wins over the default."""

    def __init__(
        self,
        *,
        default_token: Optional[str] = None,
        api_base: str = API_BASE,
        raw_base: str = RAW_BASE,
        timeout: Optional[float] = None,
    ) -> None:
        self._default_token = default_token
        self._api_base = api_base
        self._raw_base = raw_base
        self._timeout = timeout

    def __call__(self, *, token: Optional[str], pool_size: int) -> GitHubClient:
        return GitHubClient(
            token=token or self._default_token,
            api_base=self._api_base,
            raw_base=self._raw_base,
            pool_size=pool_size,
            timeout=self._timeout,
        )
