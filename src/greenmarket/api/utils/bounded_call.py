import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from src.greenmarket.core.errors import MarketError

T = TypeVar("T")


async def bounded_call(timeout: float, func: Callable[..., T], *args: Any) -> T:
    """Run a blocking service call on a worker thread with an upper time bound.

    Exceeding ``timeout`` surfaces as an ``UPSTREAM`` service error so handlers
    map it like any other service failure. The worker thread itself is not
    interrupted; services own their sessions, so it finishes on its own.
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout)
    except TimeoutError as exc:
        logger.warning(
            "{} exceeded {}s", getattr(func, "__qualname__", repr(func)), timeout
        )
        raise MarketError.upstream("request timed out") from exc
