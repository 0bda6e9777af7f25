import sys

from typing import List

try:
    from freesim import Heap, HeapConfig, Order, Policy
    from freesim.report import format_free_list, format_stats
except ImportError:
    # In case freesim is not installed, add the parent folder to the module
    # search path so that it's still possible to run this script from the
    # examples directory.
    sys.path.append("..")
    from freesim import Heap, HeapConfig, Order, Policy
    from freesim.report import format_free_list, format_stats

OPERATIONS: List[int] = [+12, +8, +20, +4, +16, -1, -3, +6, +3, -0, +10, +25]


def run(policy: Policy, order: Order) -> Heap:
    heap = Heap(HeapConfig(size=100, base_address=0, header_size=1,
                           policy=policy, order=order))
    for op in OPERATIONS:
        if op > 0:
            heap.allocate(op)
        else:
            heap.free(-op)
    return heap


def main():
    for order in Order:
        for policy in Policy:
            heap = run(policy, order)
            print(f"{policy.label:<8} {order.label:<10} "
                  f"{format_stats(heap.stats())}")
            print(f"    {format_free_list(heap.free_list)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
