import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

from hotkeys.config import settings

logger = logging.getLogger(__name__)

# Shared thread pool for CPU-bound matching passes
_executor: Optional[ThreadPoolExecutor] = None

T = TypeVar('T')


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=settings.search_workers,
            thread_name_prefix="search_pass"
        )
    return _executor


async def run_in_executor(func: Callable[..., T], *args, **kwargs) -> T:
    """
    Run a blocking/synchronous function in the shared thread pool.

    Usage:
        result = await run_in_executor(blocking_function, arg1, arg2, key=value)

    Exceptions raised by ``func`` propagate to the awaiting caller.
    """
    loop = asyncio.get_running_loop()

    if kwargs:
        return await loop.run_in_executor(_get_executor(), lambda: func(*args, **kwargs))
    return await loop.run_in_executor(_get_executor(), func, *args)


def cleanup_executor():
    """
    Shut down the thread pool executor.
    Call this when shutting down the application.
    """
    global _executor
    if _executor:
        logger.info("🛑 Shutting down search executor...")
        _executor.shutdown(wait=True)
        _executor = None
        logger.info("✅ Executor shutdown complete")
