"""
Action boundary for mutation pipelines.

Pipelines raise PlotDeskError subclasses; the boundary turns them into
ActionState failures so callers only ever see a result object. Anything
unexpected is logged with its traceback and reported with the generic
internal-error message.
"""
from functools import wraps
from typing import Awaitable, Callable

from plotdesk.core.exceptions import InternalError, PlotDeskError, StorageError
from plotdesk.core.logging_config import logger
from plotdesk.schemas.common import ActionState


def action(name: str):
    """
    Decorator for pipeline operations returning ActionState.

    Args:
        name: Operation name used in log records
    """
    def decorator(func: Callable[..., Awaitable[ActionState]]):
        @wraps(func)
        async def wrapper(*args, **kwargs) -> ActionState:
            try:
                return await func(*args, **kwargs)
            except StorageError as e:
                # Paths and collection names stay in the log
                logger.log_error_with_context(e, context=name, details=e.details)
                return ActionState.from_error(InternalError())
            except PlotDeskError as e:
                logger.info(f"[{name}] {e.code}: {e.message}")
                return ActionState.from_error(e)
            except Exception as e:
                logger.log_error_with_context(e, context=name)
                return ActionState.from_error(InternalError())

        return wrapper
    return decorator
