"""Standalone demo script for the spinline progress formatters.

Simulates a test run over several files, with passing, failing and pending
items, to demonstrate the spinner-animated grouped display. Pass "linear"
to see the single progress bar formatter instead.

Usage:
    python scripts/demo_progress.py [grouped|linear]
"""

import random
import sys
import time
from pathlib import Path

# Add src to path for direct script execution
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from spinline.models import ErrorInfo, Location, RunSummary
from spinline.registry import create_formatter

_SIMULATED_FILES = {
    "spec/models/user_spec.rb": [
        "creates a new user",
        "validates presence of email",
        "normalizes the email address before saving it to the database",
        "rejects duplicate usernames",
    ],
    "spec/models/order_spec.rb": [
        "calculates the total",
        "applies discounts",
        "raises when the cart is empty",
    ],
    "spec/services/checkout_spec.rb": [
        "charges the card",
        "sends a confirmation email",
        "retries on gateway timeout",
        "records an audit entry",
        "rolls back on failure",
    ],
}

_FAILING = {("spec/models/order_spec.rb", 1)}
_PENDING = {("spec/services/checkout_spec.rb", 2)}


def main() -> None:
    """Run the demo with a simulated test suite."""
    name = sys.argv[1] if len(sys.argv) > 1 else "grouped"
    formatter = create_formatter(name, output=sys.stdout)

    total = sum(len(items) for items in _SIMULATED_FILES.values())
    started = time.monotonic()
    failures = 0
    pending = 0

    formatter.on_run_start(total)
    for path, items in _SIMULATED_FILES.items():
        group = Location(path).group_id
        for index, label in enumerate(items):
            location = Location(path, 10 + index * 7)
            formatter.on_item_start(group, label, location, f"{group} {label}")
            time.sleep(random.uniform(0.2, 0.8))

            if (path, index) in _FAILING:
                failures += 1
                formatter.on_item_failed(
                    group,
                    ErrorInfo("ExpectationNotMetError", "expected 42.0, got 41.99", (f"{path}:{location.line}:in block",)),
                )
            elif (path, index) in _PENDING:
                pending += 1
                formatter.on_item_pending(group)
            else:
                formatter.on_item_passed(group)

    formatter.on_run_end(RunSummary(total, failures, pending, time.monotonic() - started))
    formatter.on_dump_failures()

    print("\nDemo complete!")


if __name__ == "__main__":
    main()
