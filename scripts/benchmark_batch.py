#!/usr/bin/env python3
"""
Compare one batched script against one request per record.

Finds N records and bumps their count observation, first as a single
POST /execute call, then as N separate calls carrying one record each (the
round-trip pattern a client calling tools per record would follow).

Run the server with demo data first:
  GRAPH_SEED_RECORDS=50 uvicorn code_executor.main:app --app-dir backend

Usage:
  python scripts/benchmark_batch.py [--url URL] [--records N] [--concurrent C]
  Or set env: EXECUTOR_URL, RECORDS, CONCURRENT
"""

import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import httpx

BATCH_SCRIPT = """
targets = {names!r}
found = await memory.open_nodes(targets)
updates = []
for entity in found['entities']:
    current = 0
    for obs in entity['observations']:
        if obs.startswith('count: '):
            current = int(obs.split(': ')[1])
    updates.append({{'entityName': entity['name'], 'contents': ['count: ' + str(current + 1)]}})
await memory.add_observations(updates)
print('Updated', len(updates), 'records')
"""


def record_names(count: int) -> list[str]:
    return [f"Record_{i:03d}" for i in range(1, count + 1)]


def run_script(client: httpx.Client, url: str, code: str) -> tuple[bool, float]:
    """POST one script; return (success, server-side elapsedMs)."""
    r = client.post(url, json={"code": code}, timeout=60)
    r.raise_for_status()
    data = r.json()
    if not data["success"]:
        print(f"script failed: {data['error']}", file=sys.stderr)
    return (data["success"], data["elapsedMs"])


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Batched script vs per-record requests against /execute."
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("EXECUTOR_URL", "http://localhost:8000/api/v1/execute"),
        help="Execute endpoint URL",
    )
    parser.add_argument(
        "--records",
        type=int,
        default=int(os.environ.get("RECORDS", "5")),
        help="Number of records to update (default 5)",
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        default=int(os.environ.get("CONCURRENT", "1")),
        help="Parallel workers for the per-record run (default 1)",
    )
    args = parser.parse_args()
    names = record_names(args.records)

    print(f"Updating {len(names)} records via {args.url}")
    print("---")

    with httpx.Client() as client:
        started = time.perf_counter()
        ok, server_ms = run_script(client, args.url, BATCH_SCRIPT.format(names=names))
        batch_ms = (time.perf_counter() - started) * 1000
        print(f"batch: 1 request, ok={ok}, server {server_ms:.1f}ms, total {batch_ms:.1f}ms")

        started = time.perf_counter()
        failures = 0
        with ThreadPoolExecutor(max_workers=args.concurrent) as executor:
            futures = {
                executor.submit(run_script, client, args.url, BATCH_SCRIPT.format(names=[n])): n
                for n in names
            }
            for fut in as_completed(futures):
                try:
                    ok, _ = fut.result()
                except httpx.HTTPError as e:
                    print(f"{futures[fut]} request error: {e}", file=sys.stderr)
                    ok = False
                failures += 0 if ok else 1
        single_ms = (time.perf_counter() - started) * 1000
        print(
            f"per-record: {len(names)} requests, failures={failures}, total {single_ms:.1f}ms"
        )

    print("---")
    if batch_ms > 0:
        print(f"Done. per-record / batch = {single_ms / batch_ms:.1f}x")


if __name__ == "__main__":
    main()
