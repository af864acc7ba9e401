#!/usr/bin/env python3
"""Poll one device through the cloud API and print what gets published.

Runs the same refresh -> parse -> publish cycle the library runs on a
schedule, using a sink that prints every field transition.

Usage
-----
Set environment variables and run::

    export SENSORSYNC_TOKEN="your-api-token"
    python scripts/poll_device.py C0FFEE123456 --family meter --unit 1

Options::

    --family {contact,meter}   Device family (default: contact)
    --unit N                   Temperature unit preference for meters
    --count N                  Number of refresh cycles (default: 1)
    --interval SECONDS         Pause between cycles (default: 5)
    --json                     Print the final snapshot as JSON
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysensorsync import (  # noqa: E402
    CharacteristicStore,
    DeviceConfig,
    DeviceFamily,
    SensorSyncClient,
    SensorSyncConfig,
)


def _print_change(field: str, value: Any) -> None:
    if isinstance(value, BaseException):
        print(f"  {field:<20}: ERROR {value}")
    else:
        print(f"  {field:<20}: {value!r}")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Poll a sensor device via the cloud API.")
    parser.add_argument("device_id", help="Cloud device id")
    parser.add_argument("--family", choices=[f.value for f in DeviceFamily], default=DeviceFamily.CONTACT.value)
    parser.add_argument("--unit", type=int, default=None, help="0 = to Celsius, 1 = to Fahrenheit")
    parser.add_argument("--count", type=int, default=1, help="Number of refresh cycles")
    parser.add_argument("--interval", type=float, default=5.0, help="Seconds between cycles")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Print final snapshot as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = SensorSyncConfig.from_env(api_trace_enabled=args.verbose)
    device = DeviceConfig(args.device_id, family=DeviceFamily(args.family), unit=args.unit)
    sink = CharacteristicStore(on_change=_print_change)

    async with SensorSyncClient(config) as client:
        engine = client.add_device(device, sink)
        for cycle in range(args.count):
            if cycle:
                await asyncio.sleep(args.interval)
            print(f"-- cycle {cycle + 1}")
            outcome = await engine.refresh()
            print(f"   outcome: {outcome}")

    if args.json_mode and engine.snapshot is not None:
        print(json.dumps(engine.snapshot.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
