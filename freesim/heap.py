from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from freesim.config import HeapConfig, Order, Policy
from freesim.errors import InternalInconsistency
from freesim.telemetrics import LOGGER

LOGGER = LOGGER.getChild('Heap')

# (index into the free list or None, number of blocks examined)
SearchResult = Tuple[Optional[int], int]


@dataclass(frozen=True)
class FreeBlock:
    address: int
    size: int

    @property
    def end(self) -> int:
        return self.address + self.size

    def carve(self, size: int) -> Optional[FreeBlock]:
        """Take `size` units from the front of the block and return what is
        left of it, or None when the block is used up entirely."""
        if size > self.size or size < 0:
            raise InternalInconsistency(
                f'Cannot carve {size} from block '
                f'[addr: {self.address} size: {self.size}]')
        if size == self.size:
            return None
        return FreeBlock(self.address + size, self.size - size)


@dataclass(frozen=True)
class AllocationRecord:
    id: int
    address: int
    size: int

    @property
    def end(self) -> int:
        return self.address + self.size


@dataclass(frozen=True)
class AllocationOutcome:
    request: int
    address: Optional[int]
    search_cost: int
    id: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.address is not None


class FreeOutcome(Enum):
    OK = 0
    INVALID_ID = 1

    @property
    def ok(self) -> bool:
        return self is FreeOutcome.OK


@dataclass(frozen=True)
class HeapStats:
    free_blocks: int
    free_bytes: int
    allocated_blocks: int
    allocated_bytes: int
    largest_free: int

    @property
    def fragmentation(self) -> float:
        """Share of the free space that lies outside the largest free block.
        0.0 means all free space is contiguous (or nothing is free)."""
        if self.free_bytes == 0:
            return 0.0
        return 1.0 - self.largest_free / self.free_bytes


def _first_fit(blocks: List[FreeBlock], needed: int,
               indices: Iterable[int]) -> SearchResult:
    examined = 0
    for idx in indices:
        examined += 1
        if blocks[idx].size >= needed:
            return idx, examined
    return None, examined


def _extreme_fit(blocks: List[FreeBlock], needed: int,
                 better: Callable[[int, int], bool]) -> SearchResult:
    chosen: Optional[int] = None
    for idx, block in enumerate(blocks):
        if block.size < needed:
            continue
        if chosen is None or better(block.size, blocks[chosen].size):
            chosen = idx
    return chosen, len(blocks)


def find_first(blocks: List[FreeBlock], needed: int,
               order: Order) -> SearchResult:
    return _first_fit(blocks, needed, range(len(blocks)))


def find_best(blocks: List[FreeBlock], needed: int,
              order: Order) -> SearchResult:
    # A size-sorted list lets the first fit from the small end be the best.
    if order == Order.BY_SIZE_ASC:
        return _first_fit(blocks, needed, range(len(blocks)))
    if order == Order.BY_SIZE_DESC:
        return _first_fit(blocks, needed, reversed(range(len(blocks))))
    return _extreme_fit(blocks, needed, lambda size, best: size < best)


def find_worst(blocks: List[FreeBlock], needed: int,
               order: Order) -> SearchResult:
    if order == Order.BY_SIZE_ASC:
        return _first_fit(blocks, needed, reversed(range(len(blocks))))
    if order == Order.BY_SIZE_DESC:
        return _first_fit(blocks, needed, range(len(blocks)))
    return _extreme_fit(blocks, needed, lambda size, worst: size > worst)


_SEARCHES = {
    Policy.FIRST: find_first,
    Policy.BEST: find_best,
    Policy.WORST: find_worst,
}

_SORT_KEYS: Mapping[Order, Tuple[Callable[[FreeBlock], int], bool]] = {
    Order.BY_ADDRESS: (lambda block: block.address, False),
    Order.BY_SIZE_ASC: (lambda block: block.size, False),
    Order.BY_SIZE_DESC: (lambda block: block.size, True),
}


class Heap:
    """A simulated heap of `config.size` units starting at
    `config.base_address`, tracked as a free list plus a table of live
    allocations.

    Allocation shrinks the chosen free block where it sits in the free
    list; freeing re-sorts the whole list according to `config.order`
    (and coalesces neighbours if enabled). Under size-ordered lists the
    list may therefore be out of order between a shrink and the next free,
    and placement decisions observe that.

    A Heap is not safe for concurrent mutation: both `allocate` and `free`
    are multi-step updates. Callers sharing one across threads must
    synchronize externally."""

    config: HeapConfig

    def __init__(self, config: HeapConfig) -> None:
        self.config = config
        self._free_list: List[FreeBlock] = [
            FreeBlock(config.base_address, config.size)
        ]
        self._allocations: Dict[int, AllocationRecord] = {}
        self._next_id = 0
        self._cursor = 0

    @property
    def free_list(self) -> Tuple[FreeBlock, ...]:
        return tuple(self._free_list)

    @property
    def allocations(self) -> Mapping[int, AllocationRecord]:
        return MappingProxyType(self._allocations)

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def free_bytes(self) -> int:
        return sum(block.size for block in self._free_list)

    @property
    def allocated_bytes(self) -> int:
        return sum(record.size for record in self._allocations.values())

    @property
    def largest_free_block(self) -> Optional[FreeBlock]:
        if not self._free_list:
            return None
        return max(self._free_list, key=lambda block: block.size)

    def stats(self) -> HeapStats:
        largest = self.largest_free_block
        return HeapStats(
            free_blocks=len(self._free_list),
            free_bytes=self.free_bytes,
            allocated_blocks=len(self._allocations),
            allocated_bytes=self.allocated_bytes,
            largest_free=largest.size if largest is not None else 0,
        )

    def allocate(self, request: int) -> AllocationOutcome:
        if request < 0:
            raise ValueError(f'Cannot allocate a negative size: {request}')
        needed = request + self.config.header_size

        idx, examined = self._find_block(needed)
        if idx is None:
            LOGGER.info(f'Failed to allocate {request} after checking '
                        f'{examined} blocks')
            return AllocationOutcome(request, None, examined)

        address = self._carve(idx, needed)
        record = AllocationRecord(self._next_id, address, needed)
        self._allocations[record.id] = record
        self._next_id += 1
        LOGGER.debug(f'Allocated id {record.id}: {needed} at {address} '
                     f'({examined} blocks examined)')
        return AllocationOutcome(request, address, examined, record.id)

    def free(self, block_id: int) -> FreeOutcome:
        record = self._allocations.pop(block_id, None)
        if record is None:
            LOGGER.info(f'Invalid free: no such block exists: {block_id}')
            return FreeOutcome.INVALID_ID

        # An empty record gives back no interval.
        if record.size > 0:
            self._free_list.append(FreeBlock(record.address, record.size))
        self._sort()
        if self.config.coalesce:
            self._coalesce()
        LOGGER.debug(f'Freed id {block_id}: {record.size} at {record.address}')
        return FreeOutcome.OK

    def check_consistency(self) -> None:
        """Raise InternalInconsistency unless the free list and the
        allocation table together tile the heap exactly."""
        cfg = self.config
        total = self.free_bytes + self.allocated_bytes
        if total != cfg.size:
            raise InternalInconsistency(
                f'Free ({self.free_bytes}) and allocated '
                f'({self.allocated_bytes}) sizes add up to {total}, '
                f'heap size is {cfg.size}')

        intervals: List[Tuple[int, int, str]] = [
            (block.address, block.end, 'free') for block in self._free_list
        ]
        intervals.extend(
            (record.address, record.end, f'id {record.id}')
            for record in self._allocations.values()
        )
        for start, end, name in intervals:
            if start < cfg.base_address or end > cfg.end_address or end < start:
                raise InternalInconsistency(
                    f'Interval {start}-{end} ({name}) lies outside the heap')

        intervals = sorted(i for i in intervals if i[1] > i[0])
        for prev, cur in zip(intervals, intervals[1:]):
            if prev[1] > cur[0]:
                raise InternalInconsistency(
                    f'Interval {prev[0]}-{prev[1]} ({prev[2]}) overlaps '
                    f'{cur[0]}-{cur[1]} ({cur[2]})')

    def _find_block(self, needed: int) -> SearchResult:
        if self.config.policy == Policy.NEXTFIT:
            return self._find_next_fit(needed)
        search = _SEARCHES[self.config.policy]
        return search(self._free_list, needed, self.config.order)

    def _find_next_fit(self, needed: int) -> SearchResult:
        count = len(self._free_list)
        if count == 0:
            return None, 0
        # The cursor is a position, not a block; the list may have changed.
        start = self._cursor % count
        indices = [(start + offset) % count for offset in range(count)]
        idx, examined = _first_fit(self._free_list, needed, indices)
        if idx is not None:
            self._cursor = idx
        return idx, examined

    def _carve(self, idx: int, needed: int) -> int:
        block = self._free_list[idx]
        rest = block.carve(needed)
        if rest is None:
            del self._free_list[idx]
        else:
            self._free_list[idx] = rest
        return block.address

    def _sort(self) -> None:
        key, reverse = _SORT_KEYS[self.config.order]
        self._free_list.sort(key=key, reverse=reverse)

    def _coalesce(self) -> None:
        # Adjacency only means something in address order.
        blocks = sorted(self._free_list, key=lambda block: block.address)
        merged: List[FreeBlock] = []
        for block in blocks:
            if merged and merged[-1].end == block.address:
                last = merged.pop()
                block = FreeBlock(last.address, last.size + block.size)
            merged.append(block)
        self._free_list = merged
        self._sort()

    def __repr__(self) -> str:
        return (f'<Heap {self.config.policy.label} {self.config.order.label}: '
                f'{len(self._free_list)} free, '
                f'{len(self._allocations)} allocated>')
