from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Sequence


def fetch_all(
    keys: Sequence[str],
    fetch: Callable[[str], Any],
    *,
    key_name: str = "symbol",
    source: str = "",
    max_workers: int = 8,
    logger=None,
) -> Dict[str, Any]:
    """Run ``fetch`` for every key in parallel and partition the outcomes.

    One failing key never fails the batch; its error message is reported in
    ``failed``. Entries keep the order of ``keys``.
    """

    results: List[Dict[str, Any]] = []
    if keys:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(keys))) as pool:
            futures = [(key, pool.submit(fetch, key)) for key in keys]
            for key, future in futures:
                try:
                    results.append({key_name: key, "success": True, "data": future.result()})
                except Exception as exc:  # noqa: BLE001
                    if logger:
                        logger.warning("Fetch failed for %s: %s", key, exc)
                    results.append({key_name: key, "success": False, "error": str(exc) or type(exc).__name__})

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    if logger:
        logger.info("Fetched %s of %s entries, %s failed", len(successful), len(results), len(failed))
    return {
        "successful": successful,
        "failed": failed,
        "total": len(results),
        "successfulCount": len(successful),
        "failedCount": len(failed),
        "source": source,
    }
