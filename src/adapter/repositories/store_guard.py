import asyncio
from typing import Awaitable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from src.domain.errors import PersistenceError

T = TypeVar("T")


async def guarded(operation: Awaitable[T], timeout: float) -> T:
    """Run a store call with a bounded timeout; surface failures as PersistenceError"""
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise PersistenceError(f"Session store timed out after {timeout}s") from exc
    except SQLAlchemyError as exc:
        raise PersistenceError(
            f"Session store failure: {exc.__class__.__name__}"
        ) from exc
