"""
Asyncio helpers shared by the inventory and executor services
"""
import asyncio
import functools
from typing import Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar('T')


async def run_blocking(func: Callable[..., T], *args, **kwargs) -> T:
    """Run a blocking callable in the loop's default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


def bounded(semaphore: asyncio.Semaphore, func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Wrap a coroutine function so at most the semaphore's value run at once."""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        async with semaphore:
            return await func(*args, **kwargs)
    return wrapper


async def gather_all(aws: Iterable[Awaitable[T]]) -> List[T]:
    """
    Await every awaitable and return their results in order.

    Unlike a plain ``asyncio.gather`` the call only returns once every
    awaitable has settled; if any of them failed, the first failure (in
    submission order) is raised afterwards.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
