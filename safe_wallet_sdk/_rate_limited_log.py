"""
Thread-safe rate-limited logging utilities.

Best-effort steps (manifest discovery, analytics) fail often and for boring
reasons, so their failures are logged at most once per interval.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60

# One cache per interval, created lazily
_log_caches = {}
_log_cache_lock = threading.RLock()


def _get_cache(interval: int) -> TTLCache:
    cache = _log_caches.get(interval)
    if cache is None:
        cache = TTLCache(maxsize=100, ttl=interval)
        _log_caches[interval] = cache
    return cache


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = DEFAULT_INTERVAL,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message with rate limiting, in a thread-safe manner.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Minimum interval between identical logs in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)

    key = f"{level}:{message}"

    with _log_cache_lock:
        cache = _get_cache(interval)
        if key in cache:
            return False

        log_method(message)
        cache[key] = True  # Value doesn't matter, TTL handles expiry
        return True


def reset_rate_limited_log() -> None:
    """Forget every suppressed message. Mostly useful in tests."""
    with _log_cache_lock:
        _log_caches.clear()
