from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from vscnix.exceptions import HTTPStatusError, NetworkError, RateLimitHeaderError
from vscnix.internal_config import (
    DEFAULT_USER_AGENT,
    HTTP_STREAM_CONNECT_TIMEOUT_SECONDS,
    HTTP_STREAM_READ_TIMEOUT_SECONDS,
    RATE_LIMIT_MARGIN_SECONDS,
    RETRY_AFTER_MAX_SECONDS,
)

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> int:
    """Return the Retry-After delay in whole seconds.

    The marketplace only sends the delta-seconds form. Anything else is
    rejected instead of guessing a delay.
    """
    raw = (value or "").strip()
    if not (raw.isascii() and raw.isdigit()):
        raise RateLimitHeaderError(
            f"Invalid Retry-After header on rate limited response: {value!r}"
        )
    seconds = int(raw)
    if seconds > RETRY_AFTER_MAX_SECONDS:
        raise RateLimitHeaderError(
            f"Retry-After of {seconds} seconds exceeds {RETRY_AFTER_MAX_SECONDS}"
        )
    return seconds


def status_text(response: requests.Response) -> str:
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


class MarketplaceClient(object):
    """Issue marketplace requests and wait out rate limiting."""

    session: requests.Session
    sleep: Callable[[float], None]
    timeout: tuple[int, int]

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: tuple[int, int] = (
            HTTP_STREAM_CONNECT_TIMEOUT_SECONDS,
            HTTP_STREAM_READ_TIMEOUT_SECONDS,
        ),
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.timeout = timeout
        self.sleep = sleep

    def fetch(self, url: str) -> requests.Response:
        """GET *url*, retrying for as long as the server answers 429.

        The returned response is streamed; the caller has to close it.
        """
        while True:
            try:
                response: requests.Response = self.session.get(
                    url, stream=True, timeout=self.timeout
                )
            except requests.RequestException as e:
                raise NetworkError(f"Request to {url} failed: {e}") from e

            if response.status_code == requests.codes.too_many_requests:
                try:
                    seconds = (
                        parse_retry_after(response.headers.get("Retry-After"))
                        + RATE_LIMIT_MARGIN_SECONDS
                    )
                finally:
                    response.close()
                logger.info(f"Waiting for {seconds} seconds, then retrying...")
                self.sleep(seconds)
                continue

            if response.status_code != requests.codes.ok:
                status = status_text(response)
                response.close()
                raise HTTPStatusError(status, url=url)

            return response

    def fetch_content(self, url: str) -> bytes:
        """Fetch *url* and return its raw body.

        Decoding is left to the HTML parser, which honours the page's meta
        charset when the response headers carry none.
        """
        with self.fetch(url) as response:
            try:
                return response.content
            except requests.RequestException as e:
                raise NetworkError(f"Reading {url} failed: {e}") from e
