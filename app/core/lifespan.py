import contextlib
from contextlib import asynccontextmanager
import asyncio
import logging

from app.core.response_cache import get_response_cache

logger = logging.getLogger(__name__)

_PURGE_INTERVAL_S = 600


@asynccontextmanager
async def lifespan(app):
    cache = get_response_cache()
    purge = getattr(cache, "purge_expired", None)

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                deleted = purge()
                if deleted:
                    logger.info("response_cache_purge deleted=%s", deleted)
            except Exception as exc:  # pragma: no cover
                logger.warning("response_cache_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=_PURGE_INTERVAL_S)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge()) if callable(purge) else None
    yield
    stop_event.set()
    if purge_task is not None and not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
