"""HTTP session utilities for the Dgraph admin and readiness clients."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


def create_session(
    pool_connections: int = 1,
    pool_maxsize: int = 1,
    retry_total: int = 0,
    retry_backoff_factor: float = 0.0,
    retry_status_forcelist: tuple = (),
) -> requests.Session:
    """Create a requests Session for talking to a single Dgraph instance.

    Transport-level retries are off by default: the readiness poller and the
    admin client apply their own ``RetryPolicy`` and must see every failure.

    Args:
        pool_connections: Number of connection pools to cache (default: 1).
        pool_maxsize: Maximum connections per pool (default: 1).
        retry_total: Maximum number of urllib3 retries (default: 0).
        retry_backoff_factor: Backoff factor for urllib3 retries (default: 0).
        retry_status_forcelist: HTTP status codes urllib3 retries on (default: none).

    Returns:
        A configured requests.Session object.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=retry_total,
        backoff_factor=retry_backoff_factor,
        status_forcelist=retry_status_forcelist,
        raise_on_status=False,
    )

    adapter = HTTPAdapter(
        pool_connections=pool_connections,
        pool_maxsize=pool_maxsize,
        max_retries=retry_strategy,
    )

    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session
