"""
JSON data over HTTP as a coroutine

    data = await ajax(url="https://example.com/api/items", verb="POST", data={"n": 1})
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp
from pydantic import BaseModel, Field

from .config import get_config
from .errors import AjaxError, ErrorCode

logger = logging.getLogger(__name__)


class ResponseType(str, Enum):
    JSON = "json"
    TEXT = "text"
    BYTES = "bytes"


class AjaxOptions(BaseModel):
    """Request description for ajax()"""
    verb: str = "GET"
    url: str = ""
    response_type: ResponseType = ResponseType.JSON
    data: Any = None
    timeout: Optional[float] = Field(default=None, gt=0)
    headers: Dict[str, str] = Field(default_factory=dict)

    def request_url(self) -> str:
        """URL including the JSON-encoded query for GET requests with data"""
        if self.verb.upper() == "GET" and self.data:
            return f"{self.url}?data={quote(json.dumps(self.data), safe='')}"
        return self.url


async def ajax(
    options: Optional[AjaxOptions] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    **fields: Any
) -> Any:
    """
    Perform a JSON request and return the decoded response body

    Either pass an AjaxOptions instance or its fields as keyword arguments.
    Raises AjaxError for non-2xx responses, network failures and timeouts.
    """
    if options is None:
        options = AjaxOptions(**fields)

    verb = options.verb.upper()
    url = options.request_url()
    timeout = aiohttp.ClientTimeout(total=options.timeout or get_config().ajax_timeout)
    headers = {'Content-Type': 'application/json', **options.headers}
    body = json.dumps(options.data or {}) if verb == "POST" else None

    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession()

    logger.debug(f"{verb} {url}")
    try:
        async with session.request(verb, url, data=body, headers=headers, timeout=timeout) as response:
            if not 200 <= response.status < 300:
                raise AjaxError(
                    ErrorCode.HTTP_REQUEST_FAILED,
                    url=url,
                    status=response.status,
                    reason=response.reason
                )
            return await _read_body(response, options.response_type, url)
    except asyncio.TimeoutError as e:
        raise AjaxError(ErrorCode.REQUEST_TIMEOUT, url=url, cause=e)
    except aiohttp.ClientError as e:
        raise AjaxError(ErrorCode.NETWORK_ERROR, url=url, cause=e)
    finally:
        if owns_session:
            await session.close()


async def _read_body(response: aiohttp.ClientResponse, response_type: ResponseType, url: str) -> Any:
    if response_type == ResponseType.TEXT:
        return await response.text()
    if response_type == ResponseType.BYTES:
        return await response.read()

    text = await response.text()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError as e:
        raise AjaxError(ErrorCode.INVALID_RESPONSE, url=url, status=response.status, cause=e)
