#!/usr/bin/env python3
############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# demo_fairness.py: Demo script for DRF offer ordering
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Demonstration script for DRF ordering in drfsorter.

This script simulates frameworks with different task shapes competing
for one pool. Each round the sorter picks the next framework, which
launches one task if it still fits, and the resulting order is printed.
"""

import argparse
from dataclasses import dataclass
from typing import Dict, List

from drfsorter.core.resources import Resources
from drfsorter.core.sorter import DRFSorter
from drfsorter.logging_config import bind_allocator_context, clear_allocator_context, setup_logging

DEFAULT_POOL = "cpus:9;mem:18;gpus:4"


@dataclass
class Framework:
    """A simulated framework and the shape of each of its tasks."""
    name: str
    task: Resources
    weight: float = 1.0
    launched: int = 0


def fits(task: Resources, available: Resources) -> bool:
    return all(available.get(name) >= value for name, value in task.scalars())


def run_demo(pool: Resources, frameworks: List[Framework], rounds: int) -> None:
    """Run the ordering demonstration."""
    print("=" * 60)
    print("drfsorter DRF Ordering Demo")
    print("=" * 60)
    print()
    print(f"Pool: {pool}")
    for fw in frameworks:
        print(f"  {fw.name}: task {fw.task} weight {fw.weight:g}")
    print()

    sorter = DRFSorter()
    sorter.add_resources(pool)
    for fw in frameworks:
        sorter.add(fw.name, weight=fw.weight)
        sorter.activate(fw.name)

    by_name: Dict[str, Framework] = {fw.name: fw for fw in frameworks}
    available = pool.copy()

    for round_num in range(1, rounds + 1):
        bind_allocator_context(round=round_num)
        order = sorter.sort()

        chosen = None
        for name in order:
            if fits(by_name[name].task, available):
                chosen = by_name[name]
                break

        if chosen is None:
            print(f"Round {round_num:2d}: {' > '.join(order)} | pool exhausted")
            break

        sorter.allocated(chosen.name, chosen.task)
        available = available - chosen.task
        chosen.launched += 1
        print(f"Round {round_num:2d}: {' > '.join(order)} | offer -> {chosen.name}")

    clear_allocator_context()

    print()
    print("=" * 60)
    print("Results")
    print("=" * 60)
    for fw in frameworks:
        print(f"  {fw.name}: {fw.launched} tasks, holding {sorter.allocation(fw.name)}")
    print(f"  Unallocated: {available}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulate DRF offer ordering")
    parser.add_argument("--pool", default=DEFAULT_POOL,
                        help=f"Pool resources (default: {DEFAULT_POOL})")
    parser.add_argument("--framework", action="append", default=[],
                        metavar="NAME=RESOURCES[@WEIGHT]",
                        help="Framework and per-task resources, e.g. 'spark=gpus:1;mem:4@2'")
    parser.add_argument("--rounds", type=int, default=20,
                        help="Maximum number of offer rounds (default: 20)")
    args = parser.parse_args()

    setup_logging()

    specs = args.framework or ["analytics=gpus:1;mem:4", "training=gpus:1;mem:1@2"]
    frameworks = []
    for spec in specs:
        name, _, rest = spec.partition("=")
        text, _, weight = rest.partition("@")
        if not name or not text:
            parser.error(f"bad --framework value {spec!r}")
        frameworks.append(Framework(name=name, task=Resources.parse(text), weight=float(weight or 1.0)))

    run_demo(Resources.parse(args.pool), frameworks, args.rounds)


if __name__ == "__main__":
    main()
