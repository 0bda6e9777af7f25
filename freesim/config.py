from __future__ import annotations
from enum import Enum

from freesim.errors import ConfigurationError
from freesim.telemetrics import LOGGER

LOGGER = LOGGER.getChild('Config')


class Policy(Enum):
    BEST = 'BEST'
    WORST = 'WORST'
    FIRST = 'FIRST'
    NEXTFIT = 'NEXTFIT'

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Policy:
        for policy in cls:
            if policy.label == name:
                return policy
        raise ConfigurationError(f"Invalid policy: {name}")


class Order(Enum):
    BY_ADDRESS = 'ADDRSORT'
    BY_SIZE_ASC = 'SIZESORT+'
    BY_SIZE_DESC = 'SIZESORT-'

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Order:
        for order in cls:
            if order.label == name:
                return order
        raise ConfigurationError(f"Invalid order: {name}")


class HeapConfig:
    size: int
    base_address: int
    header_size: int
    policy: Policy
    order: Order
    coalesce: bool

    def __init__(
        self,
        size: int = 100,
        base_address: int = 1000,
        header_size: int = 0,
        policy: Policy = Policy.BEST,
        order: Order = Order.BY_ADDRESS,
        coalesce: bool = False,
    ) -> None:
        if size <= 0:
            raise ConfigurationError(f"Invalid heap size: {size}")
        if base_address < 0:
            raise ConfigurationError(f"Invalid base address: {base_address}")
        if header_size < 0:
            raise ConfigurationError(f"Invalid header size: {header_size}")
        if not isinstance(policy, Policy):
            raise ConfigurationError(f"Invalid policy: {policy!r}")
        if not isinstance(order, Order):
            raise ConfigurationError(f"Invalid order: {order!r}")

        object.__setattr__(self, 'size', size)
        object.__setattr__(self, 'base_address', base_address)
        object.__setattr__(self, 'header_size', header_size)
        object.__setattr__(self, 'policy', policy)
        object.__setattr__(self, 'order', order)
        object.__setattr__(self, 'coalesce', bool(coalesce))
        LOGGER.debug(f'Created {self!r}')

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def end_address(self) -> int:
        return self.base_address + self.size

    def _key(self):
        return (self.size, self.base_address, self.header_size,
                self.policy, self.order, self.coalesce)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeapConfig):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        coalesce = 'on' if self.coalesce else 'off'
        return (f'<HeapConfig {self.size} bytes @0x{self.base_address:x}, '
                f'header {self.header_size}, {self.policy.label}, '
                f'{self.order.label}, coalesce {coalesce}>')
