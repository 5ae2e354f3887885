"""
Request queues.

Run typed requests off the caller's thread and deliver their outcome to
the listener. ``RequestQueue`` uses a pool of network worker threads and a
single delivery thread; ``AsyncRequestQueue`` runs on an asyncio loop.
"""

import asyncio
import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

from typed_request.config import QueueConfig
from typed_request.exceptions import HTTPStatusError, NetworkError, ParseError, TypedRequestError
from typed_request.http.adapter import HTTPAdapter
from typed_request.http.aiohttp_adapter import AiohttpAdapter
from typed_request.http.requests_adapter import RequestsAdapter
from typed_request.metrics import metrics_delivery, metrics_parse
from typed_request.models import Failure, NetworkResponse, Outcome, Success
from typed_request.request import TypedRequest
from typed_request.utils import setup_logging

logger = logging.getLogger("typed_request.queue")


def classify_response(request: TypedRequest, response: NetworkResponse) -> Outcome:
    """
    Gate a response on the request's accepted status codes and parse it.

    Responses with a status code outside the accepted list are not decoded.
    Exceptions escaping the listener's post-parse hook, or a hook that does
    not return an outcome, become a ParseError. A streamed body is always
    closed before this returns.
    """
    try:
        if response.status_code not in request.get_accepted_status_codes():
            return Failure(HTTPStatusError(response))
        return _parse(request, response)
    finally:
        if response.stream is not None:
            response.stream.close()


def _parse(request: TypedRequest, response: NetworkResponse) -> Outcome:
    start = time.time()
    try:
        outcome = request.parse_network_response(response)
    except Exception as e:
        logger.exception("Post-parse hook failed for %r", request)
        return Failure(ParseError(f"Post-parse hook failed: {e}", network_response=response))
    finally:
        metrics_parse(request.method.value, time.time() - start)

    if not isinstance(outcome, (Success, Failure)):
        logger.error("Post-parse hook for %r returned %r instead of an outcome", request, outcome)
        return Failure(
            ParseError(f"Post-parse hook returned {type(outcome).__name__}", network_response=response)
        )
    return outcome


def deliver_outcome(request: TypedRequest, outcome: Outcome) -> None:
    """Deliver an outcome, logging anything the listener raises"""
    try:
        request.deliver(outcome)
    except Exception:
        logger.exception("Listener raised while handling %r", request)
    finally:
        if isinstance(outcome, Failure):
            metrics_delivery(request.method.value, "error", outcome.status_code)
        else:
            metrics_delivery(request.method.value, "success", 200)


class RequestQueue:
    """
    Thread-backed request queue.

    Example:
        >>> with RequestQueue() as queue:
        ...     future = queue.add(request)
        ...     outcome = future.result()
    """

    def __init__(
        self,
        adapter: Optional[HTTPAdapter] = None,
        config: Optional[QueueConfig] = None,
    ):
        """
        Initialize request queue

        Args:
            adapter: Transport adapter (defaults to RequestsAdapter)
            config: Queue configuration
        """
        self.config = config or QueueConfig()

        if self.config.debug:
            setup_logging(debug=True)

        self.adapter = adapter or RequestsAdapter(
            stream=self.config.stream_responses, user_agent=self.config.user_agent
        )
        self._network = ThreadPoolExecutor(
            max_workers=self.config.network_threads, thread_name_prefix="typed-request-network"
        )
        self._delivery = ThreadPoolExecutor(max_workers=1, thread_name_prefix="typed-request-delivery")

        logger.debug("Request queue started with %d network threads", self.config.network_threads)

    def __enter__(self) -> "RequestQueue":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def add(self, request: TypedRequest) -> "Future[Outcome]":
        """
        Submit a request for execution.

        Args:
            request: Request to execute

        Returns:
            Future resolved with the delivered outcome once the listener
            has been called
        """
        done: "Future[Outcome]" = Future()
        self._network.submit(self._run, request, done)
        return done

    def _run(self, request: TypedRequest, done: "Future[Outcome]") -> None:
        outcome = self._execute(request)
        self._delivery.submit(self._deliver, request, outcome, done)

    def _execute(self, request: TypedRequest) -> Outcome:
        try:
            response = self.adapter.perform(request)
        except TypedRequestError as e:
            logger.warning("%s %s failed: %s", request.method.value, request.url, e)
            return Failure(e)
        except Exception as e:
            logger.exception("Unexpected transport failure for %r", request)
            return Failure(NetworkError(f"Unexpected transport failure: {e}"))
        return classify_response(request, response)

    def _deliver(self, request: TypedRequest, outcome: Outcome, done: "Future[Outcome]") -> None:
        try:
            deliver_outcome(request, outcome)
        finally:
            done.set_result(outcome)

    def close(self, wait: bool = True) -> None:
        """Stop accepting requests and shut the worker threads down"""
        self._network.shutdown(wait=wait)
        self._delivery.shutdown(wait=wait)
        self.adapter.close()


class AsyncRequestQueue:
    """
    Asyncio request queue.

    Example:
        >>> async with AsyncRequestQueue() as queue:
        ...     outcome = await queue.add(request)
    """

    def __init__(
        self,
        adapter: Optional[AiohttpAdapter] = None,
        config: Optional[QueueConfig] = None,
    ):
        self.config = config or QueueConfig()

        if self.config.debug:
            setup_logging(debug=True)

        self.adapter = adapter or AiohttpAdapter(user_agent=self.config.user_agent)

    async def __aenter__(self) -> "AsyncRequestQueue":
        await self.adapter.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.adapter.__aexit__(exc_type, exc_val, exc_tb)

    async def add(self, request: TypedRequest) -> Outcome:
        """
        Execute a request and deliver its outcome.

        Decoding runs in the loop's default executor; the listener is
        called on the event loop.

        Returns:
            The delivered outcome
        """
        try:
            response = await self.adapter.perform(request)
        except TypedRequestError as e:
            logger.warning("%s %s failed: %s", request.method.value, request.url, e)
            outcome: Outcome = Failure(e)
        except Exception as e:
            logger.exception("Unexpected transport failure for %r", request)
            outcome = Failure(NetworkError(f"Unexpected transport failure: {e}"))
        else:
            loop = asyncio.get_running_loop()
            outcome = await loop.run_in_executor(None, classify_response, request, response)

        deliver_outcome(request, outcome)
        return outcome
