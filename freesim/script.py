from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, TextIO, Union
import sys

from freesim.config import HeapConfig, Order, Policy
from freesim.errors import ConfigurationError
from freesim.heap import AllocationOutcome, FreeOutcome, Heap
from freesim import report
from freesim.telemetrics import LOGGER

LOGGER = LOGGER.getChild('Script')

DEFAULT_OPERATIONS = "+7,-0,+5,+4,+9,-2,-1,-3,+80"

Outcome = Union[AllocationOutcome, FreeOutcome]


@dataclass(frozen=True)
class Operation:
    """One script step. A positive value allocates that many units, any
    other value frees the allocation whose id is its negation (so both 0
    and -0 free id 0)."""
    value: int

    @property
    def is_allocate(self) -> bool:
        return self.value > 0

    @property
    def size(self) -> int:
        if not self.is_allocate:
            raise ValueError(f"{self} is not an allocation")
        return self.value

    @property
    def block_id(self) -> int:
        if self.is_allocate:
            raise ValueError(f"{self} is not a free")
        return -self.value

    def __str__(self) -> str:
        return f"{self.value:+d}"


@dataclass
class Job:
    operations: List[Operation] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> Job:
        return cls(parse_operations(text))

    def __str__(self) -> str:
        return ",".join(str(op) for op in self.operations)


def parse_int(token: str, what: str) -> int:
    try:
        return int(token.strip())
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid {what}: {token}") from None


def parse_operations(text: str) -> List[Operation]:
    return [
        Operation(parse_int(token, "number in list"))
        for token in text.split(",")
    ]


@dataclass
class SimulationOptions:
    size: int = 100
    start: int = 1000
    header_size: int = 0
    policy: Policy = Policy.BEST
    order: Order = Order.BY_ADDRESS
    coalesce: bool = False
    jobs: List[Job] = field(
        default_factory=lambda: [Job.parse(DEFAULT_OPERATIONS)])
    check: bool = False

    def heap_config(self) -> HeapConfig:
        return HeapConfig(
            size=self.size,
            base_address=self.start,
            header_size=self.header_size,
            policy=self.policy,
            order=self.order,
            coalesce=self.coalesce,
        )


def run_operation(heap: Heap, op: Operation, out: Optional[TextIO] = None,
                  check: bool = False) -> Outcome:
    out = out or sys.stdout
    outcome: Outcome
    if op.is_allocate:
        print(f"Allocating size {op.size}", file=out)
        outcome = heap.allocate(op.size)
        if outcome.ok:
            report.dump_free_list(heap.free_list, out)
            report.dump_allocations(heap.allocations, out)
            print(f"Allocated block of size {op.size} at {outcome.address} "
                  f"in {outcome.search_cost} searches", file=out)
        else:
            print(f"Failed to allocate {op.size} in {outcome.search_cost} "
                  f"searches", file=out)
    else:
        print(f"Attempting to free block with ID {op.block_id}", file=out)
        outcome = heap.free(op.block_id)
        if outcome.ok:
            report.dump_free_list(heap.free_list, out)
            report.dump_allocations(heap.allocations, out)
            print(f"Freed block with ID {op.block_id}", file=out)
        else:
            print(f"Failed to free block with ID {op.block_id}", file=out)
    print(file=out)

    if check:
        heap.check_consistency()
    return outcome


def run_job(heap: Heap, job: Job, out: Optional[TextIO] = None,
            check: bool = False) -> List[Outcome]:
    LOGGER.debug(f"Running job {job}")
    return [run_operation(heap, op, out, check) for op in job.operations]


def simulate(options: SimulationOptions,
             out: Optional[TextIO] = None) -> Heap:
    """Build a heap from `options`, print its setup, run every job against
    it and print a closing fragmentation summary. Returns the final heap."""
    out = out or sys.stdout
    heap = Heap(options.heap_config())
    report.dump_setup(heap.config, out)
    for job in options.jobs:
        run_job(heap, job, out, options.check)
    print(report.format_stats(heap.stats()), file=out)
    return heap
