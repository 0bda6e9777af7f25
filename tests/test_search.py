from freesim.config import Order
from freesim.heap import FreeBlock, find_best, find_first, find_worst


def _blocks(*sizes: int):
    result = []
    address = 0
    for size in sizes:
        result.append(FreeBlock(address, size))
        address += size + 1
    return result


class TestFindFirst:
    def test_scans_front_to_back(self) -> None:
        for order in Order:
            assert find_first(_blocks(5, 20, 30), 10, order) == (1, 2)
            assert find_first(_blocks(5, 20, 30), 31, order) == (None, 3)
            assert find_first([], 1, order) == (None, 0)


class TestFindBest:
    def test_address_order(self) -> None:
        blocks = _blocks(40, 12, 30, 12, 11)
        assert find_best(blocks, 12, Order.BY_ADDRESS) == (1, 5)
        assert find_best(blocks, 13, Order.BY_ADDRESS) == (2, 5)
        assert find_best(blocks, 41, Order.BY_ADDRESS) == (None, 5)

    def test_size_ascending(self) -> None:
        blocks = _blocks(5, 10, 10, 40)
        assert find_best(blocks, 8, Order.BY_SIZE_ASC) == (1, 2)
        assert find_best(blocks, 41, Order.BY_SIZE_ASC) == (None, 4)

    def test_size_descending(self) -> None:
        blocks = _blocks(40, 10, 10, 5)
        assert find_best(blocks, 8, Order.BY_SIZE_DESC) == (2, 2)
        assert find_best(blocks, 41, Order.BY_SIZE_DESC) == (None, 4)


class TestFindWorst:
    def test_address_order(self) -> None:
        blocks = _blocks(12, 40, 30, 40)
        assert find_worst(blocks, 12, Order.BY_ADDRESS) == (1, 4)
        assert find_worst(blocks, 41, Order.BY_ADDRESS) == (None, 4)

    def test_size_ascending(self) -> None:
        blocks = _blocks(5, 10, 40, 40)
        assert find_worst(blocks, 8, Order.BY_SIZE_ASC) == (3, 1)
        assert find_worst(blocks, 41, Order.BY_SIZE_ASC) == (None, 4)

    def test_size_descending(self) -> None:
        blocks = _blocks(40, 40, 10, 5)
        assert find_worst(blocks, 8, Order.BY_SIZE_DESC) == (0, 1)
        assert find_worst([], 8, Order.BY_SIZE_DESC) == (None, 0)
