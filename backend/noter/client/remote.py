"""
Noter Client — Remote HTTP Strategy
===================================

What:  NotesClient that calls the record handlers over HTTP.
How:   One httpx.AsyncClient rooted at the configured base URL; each method
       issues exactly one request and decodes the response into
       NoteResponse objects or the exception taxonomy.

Status mapping:
    2xx                     → result
    400                     → ValidationError   (server's error message)
    404                     → NotFoundError
    other                   → ServerFaultError
    httpx.TransportError    → TransportError    (no response at all)

Offline fallback:
    With a fallback InMemoryNotesClient configured, a TransportError on
    list_notes / get_note is answered from the fallback instead. Responses
    the server did send (404, 400, 5xx) are never replaced, mutations never
    fall back, and the fallback's own NotFoundError propagates unchanged.
"""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx

from noter.exceptions import NotFoundError, ServerFaultError, TransportError, ValidationError
from noter.schemas.note import NoteResponse
from noter.services import note_rules

from noter.client.base import NotesClient
from noter.client.memory import InMemoryNotesClient

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """The `error` field of a handler error body, or the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase or f"HTTP {response.status_code}"


class RemoteNotesClient(NotesClient):
    """
    HTTP client for the /notes endpoints.

    Args:
        base_url:    Root URL of the deployed handlers
        timeout:     Per-request timeout in seconds (None → httpx default)
        http_client: Pre-built httpx.AsyncClient; the caller keeps ownership
        fallback:    Offline store answering reads when the network fails
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        fallback: Optional[InMemoryNotesClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.fallback = fallback
        self._owns_http = http_client is None
        if http_client is None:
            kwargs: dict = {"base_url": self.base_url}
            if timeout is not None:
                kwargs["timeout"] = timeout
            http_client = httpx.AsyncClient(**kwargs)
        self._http = http_client

    # ── Transport ─────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict] = None,
    ) -> httpx.Response:
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            if payload is None:
                response = await self._http.request(method, path)
            else:
                response = await self._http.request(method, path, json=payload)
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, path, str(e))
            raise TransportError(
                context={"method": method, "path": path, "error_type": type(e).__name__},
            ) from e
        self._raise_for_status(response, path)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, path: str) -> None:
        if response.is_success:
            return
        message = _error_message(response)
        status = response.status_code
        context = {"status": status, "path": path}
        if status == 400:
            raise ValidationError(message=message, context=context)
        if status == 404:
            raise NotFoundError(resource="note", message=message, context=context)
        raise ServerFaultError(message=message, context=context)

    @staticmethod
    def _note_path(note_id: str) -> str:
        return f"/notes/{quote(note_id, safe='')}"

    @staticmethod
    def _json(response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ServerFaultError(
                message="Unexpected response from the notes service",
                context={"path": path, "status": response.status_code},
            ) from e

    @staticmethod
    def _decode_note(data: Any) -> NoteResponse:
        try:
            return NoteResponse.model_validate(data)
        except ValueError as e:
            raise ServerFaultError(
                message="Unexpected response from the notes service",
                context={"error_type": type(e).__name__},
            ) from e

    # ── NotesClient ───────────────────────────────────────────────────────

    async def list_notes(self) -> List[NoteResponse]:
        try:
            response = await self._request("GET", "/notes")
        except TransportError:
            if self.fallback is None:
                raise
            logger.warning("Notes service unreachable; listing notes from the offline store")
            return await self.fallback.list_notes()

        body = self._json(response, "/notes")
        if not isinstance(body, list):
            raise ServerFaultError(
                message="Unexpected response from the notes service",
                context={"path": "/notes", "body_type": type(body).__name__},
            )
        return [self._decode_note(item) for item in body]

    async def get_note(self, note_id: str) -> NoteResponse:
        note_id = note_rules.require_note_id(note_id)
        path = self._note_path(note_id)
        try:
            response = await self._request("GET", path)
        except TransportError:
            if self.fallback is None:
                raise
            logger.warning("Notes service unreachable; reading note %s from the offline store", note_id)
            return await self.fallback.get_note(note_id)
        return self._decode_note(self._json(response, path))

    async def create_note(self, title: Optional[str], content: Optional[str] = None) -> NoteResponse:
        payload = {"title": note_rules.validate_new_title(title)}
        if content is not None:
            payload["content"] = content
        response = await self._request("POST", "/notes", payload)
        return self._decode_note(self._json(response, "/notes"))

    async def update_note(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> NoteResponse:
        note_id = note_rules.require_note_id(note_id)
        # Field checks happen server-side, after the existence check
        payload = {}
        if title is not None:
            payload["title"] = title
        if content is not None:
            payload["content"] = content
        path = self._note_path(note_id)
        response = await self._request("PUT", path, payload)
        return self._decode_note(self._json(response, path))

    async def delete_note(self, note_id: str) -> None:
        note_id = note_rules.require_note_id(note_id)
        await self._request("DELETE", self._note_path(note_id))

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()
