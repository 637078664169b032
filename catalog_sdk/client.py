# catalog_sdk/client.py
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as ModelValidationError

from .config import DEFAULT_API_URL
from .errors import NetworkError, NotFoundError, StoreError, ValidationError
from .records import RECORD_MODELS

logger = logging.getLogger(__name__)


def _noun(kind: str) -> str:
    return kind[:-1] if kind.endswith("s") else kind


def _record_path(kind: str, record_id: str) -> str:
    # ids are opaque; reserved characters stay inside one path segment
    return f"/{kind}/{quote(str(record_id), safe='')}"


def _error_message(r: httpx.Response) -> Optional[str]:
    try:
        body = r.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("error") or body.get("detail")
        if isinstance(detail, str):
            return detail
    return None


class RecordStoreClient:
    """Async CRUD client for one store's record collections.

    Every call either returns parsed records or raises a ``StoreError``
    subclass exactly once; nothing is retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "RecordStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, action: str, kind: str, **kwargs) -> httpx.Response:
        noun = _noun(kind)
        try:
            r = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Failed to {action} {noun}: {e}") from e

        if r.is_success:
            return r
        logger.warning("%s %s returned %s", method, path, r.status_code)
        if r.status_code == 404:
            raise NotFoundError(f"{noun.capitalize()} not found", status_code=404)
        if r.status_code in (400, 422):
            message = _error_message(r) or f"Failed to {action} {noun}"
            raise ValidationError(message, status_code=r.status_code)
        raise StoreError(f"Failed to {action} {noun}", status_code=r.status_code)

    def _parse(self, kind: str, data: Any) -> Any:
        model = RECORD_MODELS.get(kind)
        if model is None:
            return data
        try:
            return model.model_validate(data)
        except ModelValidationError as e:
            raise StoreError(f"Malformed {_noun(kind)} in store response") from e

    @staticmethod
    def _json(r: httpx.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise StoreError("Store returned a non-JSON body", status_code=r.status_code) from e

    # Collection
    async def list_all(self, kind: str) -> List[Any]:
        r = await self._request("GET", f"/{kind}", "load", kind)
        data = self._json(r)
        if not isinstance(data, list):
            raise StoreError(f"Expected a list of {kind}", status_code=r.status_code)
        return [self._parse(kind, item) for item in data]

    async def create(self, kind: str, fields: Dict[str, Any]) -> Any:
        r = await self._request("POST", f"/{kind}", "create", kind, json=fields)
        return self._parse(kind, self._json(r))

    # Single record
    async def update(self, kind: str, record_id: str, fields: Dict[str, Any]) -> Any:
        r = await self._request("PUT", _record_path(kind, record_id), "update", kind, json=fields)
        return self._parse(kind, self._json(r))

    async def remove(self, kind: str, record_id: str) -> None:
        await self._request("DELETE", _record_path(kind, record_id), "delete", kind)

    async def health(self) -> Dict[str, Any]:
        r = await self._request("GET", "/health", "reach", "store")
        return self._json(r)

    async def reset(self) -> Dict[str, Any]:
        """Clear every collection. Only the bundled in-memory server supports it."""
        r = await self._request("POST", "/reset", "reset", "store")
        return self._json(r)
