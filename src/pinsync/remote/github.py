"""GitHub contents API adapter for the shared sync document."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any

import httpx

from pinsync.contracts.document import RemoteSnapshot, SyncDocument
from pinsync.contracts.exceptions import AuthenticationError, RemoteStoreError, RevisionConflictError
from pinsync.contracts.remote import RemoteStore
from pinsync.remote._retrying_transport import RetryingTransport

logger = logging.getLogger(__name__)

_RAW_ACCEPT = "application/vnd.github.v3.raw"
_JSON_ACCEPT = "application/vnd.github+json"
_CONFLICT_STATUS_CODES = frozenset({409, 412, 422})
_AUTH_STATUS_CODES = frozenset({401, 403})


class GitHubContentStore(RemoteStore):
    """Reads and replaces one JSON file through ``/repos/{owner}/{repo}/contents/{path}``.

    Reads are anonymous unless a credential is available. Writes re-read the
    file's blob ``sha`` and submit a single conditional ``PUT`` tagged with it.
    """

    def __init__(
        self,
        *,
        content_url: str,
        token_provider: Callable[[], str | None],
        branch: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._content_url = content_url
        self._token_provider = token_provider
        self._branch = branch
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GitHubContentStore:
        await self._open_transport()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def read(self) -> RemoteSnapshot | None:
        response = await self._request("GET", accept=_RAW_ACCEPT, headers={"Cache-Control": "no-cache"})
        if response.status_code == 404:
            logger.info("No saved data found at %s", self._content_url)
            return None
        self._raise_for_status(response, "read")

        try:
            payload: Any = response.json()
        except ValueError:
            logger.warning("Remote document is not valid JSON; treating it as empty")
            payload = None

        document = SyncDocument.from_payload(payload)
        logger.info(
            "Loaded %d points and %d color groups from remote",
            len(document.points),
            len(document.color_groups),
        )
        return RemoteSnapshot(document=document, revision=_revision_from_etag(response.headers.get("ETag")))

    async def read_revision(self) -> str | None:
        response = await self._request("GET", accept=_JSON_ACCEPT)
        if response.status_code == 404:
            return None
        self._raise_for_status(response, "revision lookup")
        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteStoreError("Remote revision lookup returned invalid JSON") from exc
        sha = payload.get("sha") if isinstance(payload, dict) else None
        return sha if isinstance(sha, str) and sha else None

    async def write(self, document: SyncDocument) -> None:
        if not self._token_provider():
            raise AuthenticationError("A credential is required to write the remote document")

        revision = await self.read_revision()
        wire = document.to_wire()
        body: dict[str, Any] = {
            "message": f"Update saved data ({len(document.points)} points, {len(document.color_groups)} color groups)",
            "content": base64.b64encode(json.dumps(wire, indent=2).encode("utf-8")).decode("ascii"),
        }
        if revision is not None:
            body["sha"] = revision
        if self._branch:
            body["branch"] = self._branch

        response = await self._request("PUT", accept=_JSON_ACCEPT, json=body)
        self._raise_for_status(response, "write")
        logger.info("Saved %d points to remote", len(document.points))

    async def _open_transport(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            transport=RetryingTransport(transport=self._transport, max_retries=self._max_retries),
            timeout=self._timeout,
            headers={"User-Agent": "pinsync", "X-GitHub-Api-Version": "2022-11-28"},
        )

    async def _request(
        self,
        method: str,
        *,
        accept: str,
        headers: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if self._client is None:
            raise RemoteStoreError("Remote store is not initialized. Use 'async with'.")

        request_headers = {"Accept": accept, **(headers or {})}
        token = self._token_provider()
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        params = {"ref": self._branch} if self._branch and method == "GET" else None

        logger.debug("%s %s", method, self._content_url)
        try:
            return await self._client.request(
                method,
                self._content_url,
                headers=request_headers,
                params=params,
                json=json,
            )
        except httpx.HTTPError as exc:
            raise RemoteStoreError(f"Remote {method} failed: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        status = response.status_code
        message = f"Remote {operation} failed ({status}): {_error_message(response)}"
        if status in _AUTH_STATUS_CODES:
            raise AuthenticationError(message, status_code=status)
        if operation == "write" and status in _CONFLICT_STATUS_CODES:
            raise RevisionConflictError(message, status_code=status)
        raise RemoteStoreError(message, status_code=status)


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or "Unknown error"
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return "Unknown error"


def _revision_from_etag(etag: str | None) -> str | None:
    if not etag:
        return None
    value = etag.strip()
    if value.startswith("W/"):
        value = value[2:]
    return value.strip('"') or None
