"""Client for the paginated member message archive.

The archive exposes ``GET /messages?skip=<int>&limit=<int>`` and answers with
``{"items": [{"message": ..., "user_name": ...}, ...]}``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings, get_settings
from .models import Message

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The message archive answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _page_items(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, dict):
        raise UpstreamError("Unexpected payload from messages API")
    items = payload.get("items") or []
    if not isinstance(items, list):
        raise UpstreamError("Unexpected payload from messages API")
    return items


def _to_message(item: Any) -> Message:
    if not isinstance(item, dict):
        return Message()
    return Message.model_validate(item)


async def fetch_all_messages(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Message]:
    """Fetch every message from the archive, one page at a time.

    Stops on the first short page, or once the offset has moved past
    ``messages_max_skip``. Any non-success status aborts the whole fetch.
    """
    s = settings or get_settings()
    limit = s.messages_page_size
    skip = 0
    pages = 0
    messages: List[Message] = []

    timeout = httpx.Timeout(s.request_timeout)
    async with httpx.AsyncClient(base_url=s.messages_api_base, timeout=timeout, transport=transport) as client:
        while True:
            response = await client.get("/messages", params={"skip": skip, "limit": limit})
            pages += 1
            if not response.is_success:
                raise UpstreamError(
                    f"Failed to fetch messages: {response.status_code}",
                    status_code=response.status_code,
                )

            items = _page_items(response.json())
            messages.extend(_to_message(item) for item in items)
            logger.debug("Fetched page skip=%d with %d items", skip, len(items))

            if len(items) < limit:
                break

            skip += limit
            if skip > s.messages_max_skip:
                logger.warning("Stopped paging at skip=%d, archive may hold more messages", skip)
                break

    logger.info("Fetched %d messages in %d pages", len(messages), pages)
    return messages
