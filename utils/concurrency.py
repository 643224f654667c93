"""
Fan-out / fan-in helper for independent remote calls.

Calls that do not depend on each other (product + specs + variants, markup +
exchange rates) run on a thread pool scoped to the single ``run_concurrently``
call and are joined before the caller continues. Because each call owns its
pool, a fanned-out call may itself fan out without waiting on a shared worker.
The first exception raised by any call is re-raised after all calls have
finished.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)


def run_concurrently(*calls: Callable[[], Any]) -> Tuple[Any, ...]:
    """
    Run zero-argument callables concurrently and return their results in order.

    Example:
        >>> product, specs = run_concurrently(
        ...     lambda: client.get_my_product(product_id, token),
        ...     lambda: client.list_my_specs(product_id, token),
        ... )
    """
    if len(calls) <= 1:
        return tuple(call() for call in calls)

    with ThreadPoolExecutor(max_workers=len(calls), thread_name_prefix="fanout") as executor:
        futures = [executor.submit(call) for call in calls]

        results = []
        first_error: Optional[BaseException] = None
        for future in futures:
            try:
                results.append(future.result())
            except Exception as e:
                if first_error is None:
                    first_error = e
                results.append(None)

    if first_error is not None:
        raise first_error
    return tuple(results)
