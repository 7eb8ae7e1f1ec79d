"""
Source Fetcher - External Data Provider Client

Retrieves the full current collection of records from an external HTTP
provider and validates it against a record schema.

Usage:
    from utils.source import SourceFetcher
    from utils.schemas import Habit

    fetcher = SourceFetcher(settings.HABITS_API_BASE, settings.HABITS_API_PATH, Habit)
    habits = fetcher.fetch_all()
"""

import logging
import time
from typing import Generic, Optional, Type, TypeVar

import httpx
import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError

from utils.errors import DecodeError, SourceUnavailable

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class SourceFetcher(Generic[RecordT]):
    """Blocking fetcher for one provider endpoint returning a JSON array."""

    def __init__(
        self,
        base_url: str,
        path: str,
        record_type: Type[RecordT],
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize fetcher.

        Args:
            base_url: Provider base URL, e.g. https://habits.example.com
            path: Collection path appended to base_url, e.g. /habits
            record_type: Pydantic model each array element is validated against
            timeout: Request timeout in seconds (None waits indefinitely)
            transport: Optional httpx transport, used to stub the provider in tests
        """
        self.url = base_url.rstrip("/") + "/" + path.lstrip("/")
        self.record_type = record_type
        self.timeout = timeout
        self.transport = transport
        self._adapter = TypeAdapter(list[record_type])

    def fetch_all(self) -> list[RecordT]:
        """
        Fetch and decode the whole collection.

        Returns:
            Records in provider order

        Raises:
            SourceUnavailable: On transport failure or non-2xx status
            DecodeError: If the body is not a JSON array of valid records
        """
        start_time = time.time()
        name = self.record_type.__name__

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("%s provider returned status=%d: url=%s", name, e.response.status_code, self.url)
            raise SourceUnavailable(f"{name} unavailable: status {e.response.status_code}") from e
        except httpx.TransportError as e:
            logger.warning("%s provider unreachable: url=%s, error=%s", name, self.url, str(e))
            raise SourceUnavailable(f"{name} unavailable: {e}") from e

        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise DecodeError(f"error decoding {name} records: {e}") from e

        if not isinstance(payload, list):
            raise DecodeError(
                f"error decoding {name} records: expected JSON array, got {type(payload).__name__}"
            )

        try:
            records = self._adapter.validate_python(payload)
        except ValidationError as e:
            # First line of the validation error is enough for the caller
            raise DecodeError(f"error decoding {name} records: {str(e).splitlines()[0]}") from e

        logger.debug(
            "Fetched %s records: url=%s, count=%d, elapsed=%.3fs",
            name, self.url, len(records), time.time() - start_time,
        )
        return records
