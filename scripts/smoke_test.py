from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from triglav_consumer import (
    JobRequest,
    ResourceRequest,
    TriglavClientError,
    create_client_from_env,
    setup_logging,
)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    try:
        client = create_client_from_env()
    except ValueError as exc:
        return _fail(str(exc))

    input_uri = _env("TEST_INPUT_RESOURCE_URI", "hdfs://localhost:8020/tmp/triglav/in")
    output_uri = _env("TEST_OUTPUT_RESOURCE_URI", "hdfs://localhost:8020/tmp/triglav/out")
    tz = _env("TEST_TIMEZONE", "+09:00")
    cleanup = _env("SMOKE_TEST_CLEANUP", "0") == "1"

    print("Config:")
    print(f"  url: {client.url}")
    print(f"  username: {client.username}")
    print(f"  authenticator: {client.authenticator}")
    print(f"  input_resource: {input_uri}")
    print(f"  output_resource: {output_uri}")
    print(f"  cleanup: {cleanup}")

    async with client:
        # --- Create job ---
        _print_step("Create or update job")
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        job_uri = f"smoke-test://triglav-consumer/{stamp}"
        request = JobRequest(
            uri=job_uri,
            input_resources=[
                ResourceRequest(uri=input_uri, unit="daily", timezone=tz, consumable=True)
            ],
            output_resources=[
                ResourceRequest(uri=output_uri, unit="daily", timezone=tz)
            ],
        )
        try:
            created = await client.create_or_update_job(request)
        except TriglavClientError as exc:
            return _fail(f"Create failed: {exc}")
        print(f"Created job id={created.id}, uri='{created.uri}'")

        # --- Verify ---
        _print_step("Verify")
        fetched = await client.get_job(created.id)
        if fetched.uri != job_uri:
            return _fail(f"Expected uri '{job_uri}', got '{fetched.uri}'")
        if [r.uri for r in fetched.input_resources] != [input_uri]:
            return _fail("Input resources did not round-trip")
        print("Verification OK")

        # --- Messages ---
        _print_step("Fetch messages")
        last = await client.get_last_message_id()
        messages = await client.fetch_messages(max(last.id - 10, 0), created.id, limit=10)
        print(f"Last message id={last.id}; {len(messages)} message(s) for job {created.id}")

        # --- Cleanup (optional) ---
        _print_step("Cleanup")
        if cleanup:
            await client.delete_job(created.id)
            print(f"Deleted job id={created.id}")
        else:
            print("Cleanup skipped (SMOKE_TEST_CLEANUP=0). Job left in system.")

    print("\nPASSED smoke test.")
    return 0


def main() -> None:
    setup_logging(_env("LOG_LEVEL", "INFO"))
    exit_code = asyncio.run(run_smoke_test())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
