import logging
from typing import Callable

logger = logging.getLogger(__name__)


def fire_and_forget(task: Callable, *args, **kwargs) -> Callable[[], None]:
    """
    Wrap a best-effort task for FastAPI BackgroundTasks

    Failures are logged and swallowed so they never reach the response
    that scheduled them.
    """
    def runner():
        try:
            task(*args, **kwargs)
        except Exception:
            logger.exception(f"Background task {getattr(task, '__name__', task)} failed")

    return runner
