"""Shared HTTP client utilities (requests + retry/backoff).

All calls to the generative-language API go through RetryingRequestExecutor so
that rate limiting and flaky connections are handled in one place.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from htflow.infrastructure.errors import (
    HttpError,
    NetworkError,
    ParseError,
    RateLimitedError,
    RequestError,
)

logger = logging.getLogger(__name__)

RATE_LIMITED_STATUS = 429


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 5
    initial_delay: float = 1.0
    backoff_multiplier: float = 2.0
    jitter: float = 1.0  # seconds, uniform in [0, jitter)


def retry_config_from_dict(config: Dict[str, Any]) -> RetryConfig:
    """Parse retry config from dict, supporting legacy aliases."""
    max_attempts = config.get("max_attempts")
    initial_delay = config.get("initial_delay")
    backoff_multiplier = config.get("backoff_multiplier")

    if max_attempts is None:
        max_attempts = config.get("max_retries", 5)
    if initial_delay is None:
        initial_delay = config.get("retry_delay", 1.0)
    if backoff_multiplier is None:
        backoff_multiplier = config.get("backoff", 2.0)

    jitter = config.get("jitter", 1.0)

    try:
        max_attempts_i = int(max_attempts)
    except (TypeError, ValueError):
        max_attempts_i = 5

    try:
        initial_delay_f = float(initial_delay)
    except (TypeError, ValueError):
        initial_delay_f = 1.0

    try:
        backoff_multiplier_f = float(backoff_multiplier)
    except (TypeError, ValueError):
        backoff_multiplier_f = 2.0

    try:
        jitter_f = float(jitter)
    except (TypeError, ValueError):
        jitter_f = 1.0

    if max_attempts_i < 1:
        max_attempts_i = 1
    if initial_delay_f < 0:
        initial_delay_f = 0.0
    if backoff_multiplier_f < 1:
        backoff_multiplier_f = 1.0
    if jitter_f < 0:
        jitter_f = 0.0

    return RetryConfig(
        max_attempts=max_attempts_i,
        initial_delay=initial_delay_f,
        backoff_multiplier=backoff_multiplier_f,
        jitter=jitter_f,
    )


@dataclass(frozen=True)
class Request:
    """One HTTP request. Headers are read-only after construction."""

    url: str
    method: str = "POST"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def post_json(
        cls, url: str, payload: Dict[str, Any], headers: Optional[Dict[str, str]] = None
    ) -> "Request":
        all_headers = {"Content-Type": "application/json"}
        all_headers.update(headers or {})
        return cls(url=url, method="POST", headers=all_headers, body=json.dumps(payload))

    @property
    def redacted_url(self) -> str:
        """URL without the query string (which may carry the API key)."""
        return self.url.split("?", 1)[0]


@dataclass(frozen=True)
class Response:
    """Result of one attempt."""

    status_code: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ParseError: If the body is empty or not valid JSON
        """
        if not self.body or not self.body.strip():
            raise ParseError("Response body is empty")
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise ParseError(f"Response body is not valid JSON: {e}") from e


@dataclass(frozen=True)
class AttemptState:
    """Where a logical call stands after a failed attempt."""

    attempt: int  # 1-based number of the attempt that just failed
    remaining: int  # attempts still allowed

    @classmethod
    def from_retry_state(cls, retry_state: RetryCallState, max_attempts: int) -> "AttemptState":
        attempt = retry_state.attempt_number
        return cls(attempt=attempt, remaining=max(max_attempts - attempt, 0))


RetryObserver = Callable[[AttemptState, BaseException, float], None]


class RetryingRequestExecutor:
    """Issues a request, retrying rate limits and transport failures with backoff.

    Delay after the i-th failed attempt (0-based) is
    ``initial_delay * backoff_multiplier ** i + uniform(0, jitter)``, which with
    the defaults is ``2^i s + [0, 1) s``. Any non-success status other than 429
    is raised immediately as HttpError.
    """

    def __init__(
        self,
        retry_config: Optional[RetryConfig] = None,
        *,
        timeout: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
        on_retry: Optional[RetryObserver] = None,
    ):
        self.retry_config = retry_config or RetryConfig()
        self.timeout = timeout
        self._sleep = sleep
        self._on_retry = on_retry

    def _wait(self):
        wait = wait_exponential(
            multiplier=self.retry_config.initial_delay,
            exp_base=self.retry_config.backoff_multiplier,
        )
        if self.retry_config.jitter > 0:
            wait = wait + wait_random(0, self.retry_config.jitter)
        return wait

    def _send(self, request: Request) -> Response:
        logger.debug(f"HTTP {request.method} {request.redacted_url}")
        try:
            resp = requests.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=request.body.encode("utf-8") if request.body is not None else None,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request to {request.redacted_url} failed: {e}") from e

        response = Response(status_code=resp.status_code, body=resp.text, headers=dict(resp.headers))
        if response.status_code == RATE_LIMITED_STATUS:
            raise RateLimitedError(response.body)
        if not response.ok:
            raise HttpError(response.status_code, response.body)
        return response

    def execute(self, request: Request, max_attempts: Optional[int] = None) -> Response:
        """Send ``request`` with up to ``max_attempts`` attempts.

        Args:
            request: Request to send
            max_attempts: Attempt budget for this call (defaults to the configured one)

        Returns:
            The first successful response

        Raises:
            RateLimitedError: If every attempt was rate limited
            NetworkError: If the last attempt failed at the transport level
            HttpError: On any other non-success status (no retry)
            RequestError: If the attempt budget is zero
        """
        attempts = self.retry_config.max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise RequestError(f"No attempts allowed (max_attempts={attempts})")

        def _before_sleep(retry_state: RetryCallState) -> None:
            if retry_state.outcome is None:
                return
            exception = retry_state.outcome.exception()
            state = AttemptState.from_retry_state(retry_state, attempts)
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            logger.warning(
                f"Request error (attempt {state.attempt}/{attempts}): {exception}. "
                f"Retrying in {delay:.2f}s..."
            )
            if self._on_retry is not None:
                self._on_retry(state, exception, delay)

        @retry(
            stop=stop_after_attempt(attempts),
            wait=self._wait(),
            retry=retry_if_exception_type((RateLimitedError, NetworkError)),
            reraise=True,
            sleep=self._sleep,
            before_sleep=_before_sleep,
        )
        def _request_with_retry() -> Response:
            return self._send(request)

        try:
            return _request_with_retry()
        except (RateLimitedError, NetworkError) as e:
            logger.error(f"Request failed after {attempts} attempts: {e}")
            raise
        except HttpError as e:
            logger.error(f"Request failed with non-retryable status {e.status_code}")
            raise
