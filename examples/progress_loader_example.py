#!/usr/bin/env python3
"""Example: Using ProgressLoader outside of test reporting

ProgressLoader renders a Docker-style progress bar that updates in place.
It works for any operation with a known number of steps: file processing,
layer downloads, migrations, batch jobs.

    from spinline import ProgressLoader

    loader = ProgressLoader(total=len(files), description="Processing files")
    for path in files:
        process(path)
        loader.increment(description=f"Processed {path}")
    loader.finish(description="All files processed!")
"""

import random
import time

from spinline import ProgressLoader


def example_file_processing():
    """Example 1: Explicit update() calls."""
    print("Example 1: Basic file processing")
    print("-" * 50)

    loader = ProgressLoader(total=20, description="Processing files")
    for i in range(20):
        loader.update(i + 1, description=f"Processing file_{i + 1}.txt")
        time.sleep(0.1)
    loader.finish(description="All files processed!")
    print()


def example_layer_download():
    """Example 2: Docker-style layer downloads."""
    print("Example 2: Downloading image layers")
    print("-" * 50)

    layers = 5
    loader = ProgressLoader(total=layers, description="Downloading image")
    for i in range(layers):
        layer_id = f"sha256:{random.getrandbits(48):012x}"
        loader.update(i + 1, description=f"Downloading layer {i + 1}/{layers}: {layer_id}")
        time.sleep(0.3)
    loader.finish(description="Image downloaded successfully!")
    print()


def example_wide_bar():
    """Example 3: Custom bar width."""
    print("Example 3: Wide progress bar")
    print("-" * 50)

    loader = ProgressLoader(total=50, width=60, description="Running tests")
    for i in range(50):
        loader.update(i + 1, description=f"Test {i + 1}/50")
        time.sleep(0.05)
    loader.finish(description="All tests passed!")
    print()


def example_increment():
    """Example 4: increment() with per-step descriptions."""
    print("Example 4: Using increment")
    print("-" * 50)

    packages = ["auth", "api", "web", "worker", "scheduler", "mailer", "notifications", "cache", "database", "utils"]
    loader = ProgressLoader(total=len(packages), description="Building packages")
    for package in packages:
        loader.increment(description=f"Building {package} package...")
        time.sleep(0.2)
    loader.finish(description="Build complete!")
    print()


def main():
    example_file_processing()
    example_layer_download()
    example_wide_bar()
    example_increment()


if __name__ == "__main__":
    main()
