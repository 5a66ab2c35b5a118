"""Common utilities for the Telemetry Hub CLI."""

import logging
import time
from functools import wraps
from typing import Any, Callable

import requests


def retry_on_failure(max_retries: int = 3, delay: float = 1.0, backoff_multiplier: float = 2.0):
    """
    Decorator for retrying functions when the hub could not be reached.

    Args:
        max_retries: Maximum number of retry attempts
        delay: Initial delay between retries in seconds
        backoff_multiplier: Multiplier for exponential backoff
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger = logging.getLogger(func.__module__)

            for attempt in range(max_retries + 1):
                try:
                    if attempt > 0:
                        logger.info(f"Retry attempt {attempt}/{max_retries} for {func.__name__}")
                    return func(*args, **kwargs)

                except Exception as e:
                    if not _should_retry_error(e):
                        raise

                    if attempt < max_retries:
                        wait_time = delay * (backoff_multiplier ** attempt)
                        logger.warning(f"Attempt {attempt + 1} failed for {func.__name__}: {e}. Retrying in {wait_time:.1f}s...")
                        time.sleep(wait_time)
                    else:
                        if max_retries:
                            logger.error(f"All {max_retries + 1} attempts failed for {func.__name__}: {e}")
                        raise
        return wrapper
    return decorator


def _should_retry_error(error: Exception) -> bool:
    """
    Determine if an error should be retried.

    Only failures to reach the hub qualify. Any HTTP response, including
    5xx, means the hub saw the command, and probe commands such as
    reboot_probe must not be delivered twice.
    """
    return isinstance(error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout))


def format_response_body(response: requests.Response) -> str:
    """Return the response body as text, or an empty string if unreadable."""
    try:
        return response.text or ""
    except requests.exceptions.RequestException:
        return ""
