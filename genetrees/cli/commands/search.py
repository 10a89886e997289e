"""Search command."""

import os
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar

import cyclopts
import httpx

from genetrees.cli.console import get_console

app = cyclopts.App(name="search", help="Search gene trees")

T = TypeVar("T")


def get_server_url() -> str:
    """Get server URL from the environment."""
    return os.environ.get("GENETREES_SERVER", "http://localhost:8000")


def with_retry(
    fn: Callable[[], T],
    retries: int = 3,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """Retry a function on transient errors with linear backoff.

    Args:
        fn: Zero-argument callable to retry.
        retries: Max retry attempts (total attempts = retries + 1).
        exceptions: Exception types to catch and retry on.

    Returns:
        Result of fn() on success.

    Raises:
        The last exception if all retries fail.
    """
    last_error: Exception | None = None
    for attempt in range(retries + 1):
        try:
            return fn()
        except exceptions as e:
            last_error = e
            if attempt < retries:
                time.sleep(0.2 * (attempt + 1))
    raise last_error  # type: ignore[misc]


def build_params(
    gene: str | None, cluster: int | None, generate_indexes: bool
) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if gene:
        params["gene"] = gene
    if cluster is not None:
        params["cluster"] = cluster
    if generate_indexes:
        params["generate_indexes"] = "true"
    return params


@app.default
def search(
    *,
    gene: str | None = None,
    cluster: int | None = None,
    generate_indexes: bool = False,
) -> None:
    """Search gene trees by gene and/or cluster.

    Args:
        gene: The Gene ID to search for.
        cluster: The Cluster ID to search for.
        generate_indexes: Create the database indexes before searching.
    """
    console = get_console()
    server_url = get_server_url()
    url = f"{server_url}/api/v1/search"
    params = build_params(gene, cluster, generate_indexes)

    try:
        response = with_retry(
            lambda: httpx.get(url, params=params),
            exceptions=(httpx.ReadError, httpx.ConnectError),
        )
        response.raise_for_status()
        job = response.json()
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Start it with: genetrees server",
        )
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(f"Server error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)
    except httpx.ReadError:
        console.error("Connection lost while reading response")
        sys.exit(1)

    console.search_job(job)
    if job.get("status") in ("failed", "failed_to_start"):
        sys.exit(1)
