from freesim.config import HeapConfig, Order, Policy
from freesim.heap import Heap
from typing import Iterable, Sequence


def make_configs(coalesce: bool = False, header_size: int = 0
                 ) -> Iterable[HeapConfig]:
    for policy in Policy:
        for order in Order:
            yield make_config(policy, order, coalesce, header_size)


def make_config(policy: Policy = Policy.FIRST,
                order: Order = Order.BY_ADDRESS,
                coalesce: bool = False,
                header_size: int = 0) -> HeapConfig:
    return HeapConfig(size=100, base_address=1000, header_size=header_size,
                      policy=policy, order=order, coalesce=coalesce)


def make_heap(policy: Policy = Policy.FIRST,
              order: Order = Order.BY_ADDRESS,
              coalesce: bool = False,
              header_size: int = 0) -> Heap:
    return Heap(make_config(policy, order, coalesce, header_size))


def fragment(heap: Heap, sizes: Sequence[int], free_ids: Sequence[int]) -> Heap:
    """Fill the heap front to back with `sizes`, then free `free_ids` in the
    given order. Only meaningful on a fresh heap."""
    for size in sizes:
        assert heap.allocate(size).ok
    for block_id in free_ids:
        assert heap.free(block_id).ok
    return heap


def blocks(heap: Heap):
    return [(block.address, block.size) for block in heap.free_list]
