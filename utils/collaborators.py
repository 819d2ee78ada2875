import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional, Protocol, TypeVar
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from core.findings import ValidationFinding

"""
Boundary helpers for the optional external collaborators (rule classifier and
correction advisor). A collaborator may be slow, unavailable or wrong; none of that
is allowed to reach the engines, which always get either an answer or the fallback.
"""

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CorrectionAdvisor(Protocol):
    """Suggests a correction for a validation finding, or None when it has nothing to add."""

    def suggest_correction(self, finding: ValidationFinding) -> Optional[str]:
        ...


def _call_with_timeout(func: Callable[..., T], args: tuple, timeout: Optional[float]) -> T:
    if timeout is None:
        return func(*args)
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        return executor.submit(func, *args).result(timeout=timeout)
    finally:
        # a hung call is abandoned, never joined
        executor.shutdown(wait=False)


def call_with_fallback(
    func: Callable[..., T],
    *args: Any,
    timeout: Optional[float] = None,
    attempts: int = 1,
    fallback: Any = None,
    label: str = "collaborator",
) -> Any:
    """
    Call `func(*args)` with a per-attempt timeout and exponential-backoff retries.

    A timeout is not retried. When every attempt fails the fallback is returned and a
    warning is logged; nothing is raised.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=0.1, max=1),
        retry=retry_if_not_exception_type(FutureTimeoutError),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        reraise=True,
    )
    try:
        return retrying(_call_with_timeout, func, args, timeout)
    except FutureTimeoutError:
        logger.warning(f"⚠️ {label} timed out after {timeout}s, using fallback")
    except Exception as e:
        logger.warning(f"⚠️ {label} failed ({type(e).__name__}: {e}), using fallback")
    return fallback
