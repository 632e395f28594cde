"""
Retry wrapper for history scans

A transaction that was just confirmed can take a moment to show up in the
transaction-history index. Scans run through with_retry get a few more chances
before an empty page is accepted as the answer. Not meant for owner queries
or single-object fetches.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from models.schemas import Page

# Configure logger for this module
logger = logging.getLogger(__name__)


async def with_retry(
    scan_fn: Callable[[], Awaitable[Page]],
    max_attempts: int = 3,
    delay: float = 2.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
) -> Page:
    """
    Call scan_fn until it returns a non-empty page or attempts run out

    Args:
        scan_fn: Zero-argument coroutine function producing a page
        max_attempts: Total number of calls allowed
        delay: Seconds to wait between attempts
        sleep: Awaitable sleep, injectable for tests

    Returns:
        First non-empty page, or whatever the final attempt returned

    Raises:
        Exception: The error raised by the final attempt
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Optional[Exception] = None

    for attempt in range(1, max_attempts + 1):
        final = attempt == max_attempts
        try:
            logger.info(f"Attempt {attempt} of {max_attempts}")
            page = await scan_fn()
            logger.info(f"Attempt {attempt} result: {len(page.data)} records found")

            if page.data or final:
                return page

            logger.info(f"No records on attempt {attempt}, retrying in {delay} seconds...")

        except Exception as e:
            if final:
                raise
            last_error = e
            logger.error(f"Attempt {attempt} failed: {str(e)}")
            logger.info(f"Retrying in {delay} seconds...")

        await sleep(delay)

    # Unreachable: the final attempt either returns or raises
    raise last_error or RuntimeError("All retry attempts failed")
