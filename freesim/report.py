from typing import Iterable, Mapping, Optional, TextIO
import sys

from freesim.config import HeapConfig
from freesim.heap import AllocationRecord, FreeBlock, HeapStats


def format_setup(config: HeapConfig) -> str:
    coalesce = "Enabled" if config.coalesce else "Disabled"
    return "\n".join([
        "Initial Setup:",
        f"Heap Size: {config.size}",
        f"Base Address: {config.base_address}",
        f"Header Size: {config.header_size}",
        f"Allocation Policy: {config.policy.label}",
        f"Free List Order: {config.order.label}",
        f"Coalescing: {coalesce}",
    ])


def format_free_list(blocks: Iterable[FreeBlock]) -> str:
    blocks = list(blocks)
    entries = "".join(
        f"[addr: {block.address} size: {block.size}] " for block in blocks
    )
    return f"Free List [Size: {len(blocks)}]: {entries}".rstrip()


def format_allocations(allocations: Mapping[int, AllocationRecord]) -> str:
    entries = " ".join(
        f"[ID: {rec.id}, Address: {rec.address}, Size: {rec.size}]"
        for _, rec in sorted(allocations.items())
    )
    return f"Allocated Blocks [Size: {len(allocations)}]: {entries}".rstrip()


def format_stats(stats: HeapStats) -> str:
    return (f"Free: {stats.free_bytes} in {stats.free_blocks} blocks "
            f"(largest {stats.largest_free}), "
            f"Allocated: {stats.allocated_bytes} in "
            f"{stats.allocated_blocks} blocks, "
            f"Fragmentation: {stats.fragmentation:.2%}")


def dump_setup(config: HeapConfig, out: Optional[TextIO] = None) -> None:
    print(format_setup(config), file=out or sys.stdout)
    print(file=out or sys.stdout)


def dump_free_list(blocks: Iterable[FreeBlock],
                   out: Optional[TextIO] = None) -> None:
    print(format_free_list(blocks), file=out or sys.stdout)


def dump_allocations(allocations: Mapping[int, AllocationRecord],
                     out: Optional[TextIO] = None) -> None:
    print(format_allocations(allocations), file=out or sys.stdout)
