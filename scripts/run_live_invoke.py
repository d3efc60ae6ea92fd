#!/usr/bin/env python3
"""
Live smoke test for the deployed forwarder and producer functions.

Exercises the same paths production traffic follows:
1. Direct SET against the producer (structured payload)
2. Direct SET with an already-serialized string payload (raw pass-through)
3. GET against the producer, which the producer's RBAC user may not run
   (access string `on ~* -@all +SET`), so a RemoteError is expected
4. SET through the forwarder function
5. A concurrent fan-out of SETs through the dispatcher

Prerequisites:
    - AWS credentials for the account holding the stack
    - Set environment variables (or a .env file in the project root):
        AWS_REGION=us-east-1
        PRODUCER_FUNCTION_NAME=<deployed producer function name>
        FORWARDER_FUNCTION_NAME=<deployed forwarder function name>  (optional)

Usage:
    python scripts/run_live_invoke.py
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from uuid import uuid4

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / '.env')

from lambda_invoker.clients.lambda_client import LambdaInvoker
from lambda_invoker.config import get_invoker_config
from lambda_invoker.dispatcher import InvocationDispatcher
from lambda_invoker.errors import InvocationError, RemoteError
from lambda_invoker.models import InvocationRequest
from lambda_invoker.payload import RawPayload


def print_header(title: str) -> None:
    print(f"\n{'=' * 70}")
    print(title)
    print("=" * 70)


def run_step(label: str, invoker: LambdaInvoker, function_name: str, payload) -> bool:
    """Invoke once and print the outcome; returns True on success."""
    print(f"\n--- {label} ---")
    try:
        result = invoker.invoke(function_name, payload)
    except InvocationError as e:
        print(f"  Failed: {type(e).__name__}: {e}")
        return False
    print(f"  Status: {result.status_code}")
    print(f"  Payload: {json.dumps(result.payload)}")
    return True


async def run_fan_out(invoker: LambdaInvoker, function_name: str, count: int) -> bool:
    print(f"\n--- Fan-out: {count} concurrent SETs ---")
    run_id = uuid4().hex[:8]
    requests = [
        InvocationRequest.of(
            function_name,
            {'op': 'SET', 'key': f'live:{run_id}:{i}', 'value': str(i)},
        )
        for i in range(count)
    ]
    result = await InvocationDispatcher(invoker).dispatch(requests, timeout=30)
    print(f"  Summary: {json.dumps(result.to_dict())}")
    return result.summary.all_succeeded


def main() -> int:
    config = get_invoker_config()
    producer = config.PRODUCER_FUNCTION_NAME
    forwarder = os.getenv('FORWARDER_FUNCTION_NAME')
    invoker = LambdaInvoker(config=config)
    key = f'live:{uuid4().hex[:8]}'

    print_header(f"LIVE INVOCATION SMOKE TEST (producer={producer})")

    outcomes = {
        'set': run_step(
            "SET (structured)", invoker, producer,
            {'op': 'SET', 'key': key, 'value': '1'},
        ),
        'set_raw': run_step(
            "SET (raw string)", invoker, producer,
            RawPayload(json.dumps({'op': 'SET', 'key': key, 'value': '2'})),
        ),
    }

    print("\n--- GET (expected to be denied for the producer user) ---")
    try:
        result = invoker.invoke(producer, {'op': 'GET', 'key': key})
        print(f"  Unexpected success: {json.dumps(result.payload)}")
        outcomes['get_denied'] = False
    except RemoteError as e:
        print(f"  Denied as expected: {e.error_type}: {e.error_message}")
        outcomes['get_denied'] = True

    if forwarder:
        outcomes['forwarder'] = run_step(
            "SET via forwarder", invoker, forwarder,
            {'op': 'SET', 'key': key, 'value': '3'},
        )

    outcomes['fan_out'] = asyncio.run(run_fan_out(invoker, producer, 5))

    print_header("SUMMARY")
    for name, ok in outcomes.items():
        print(f"  {name:<12} {'PASS' if ok else 'FAIL'}")

    return 0 if all(outcomes.values()) else 1


if __name__ == '__main__':
    sys.exit(main())
