"""The thread pool executor shared by everything touching an UnQLite database.

It has exactly one worker: unqlite-python handles are not safe to share across threads,
so keeping every database call on the same thread also keeps the calls in submission order.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

_global_thread_pool_executor: Optional[ThreadPoolExecutor] = None


def get() -> ThreadPoolExecutor:
    """Return the shared thread pool executor, create it if it does not exists."""
    global _global_thread_pool_executor
    if not _global_thread_pool_executor:
        _global_thread_pool_executor = ThreadPoolExecutor(
            1, "accountbox.utils.global_thread_pool_executor"
        )
    return _global_thread_pool_executor
