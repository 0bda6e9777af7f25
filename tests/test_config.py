import pytest

from freesim.config import HeapConfig, Order, Policy
from freesim.errors import ConfigurationError, FreesimError


class TestNames:
    def test_policy_names(self) -> None:
        assert Policy.from_name('BEST') is Policy.BEST
        assert Policy.from_name('WORST') is Policy.WORST
        assert Policy.from_name('FIRST') is Policy.FIRST
        assert Policy.from_name('NEXTFIT') is Policy.NEXTFIT
        assert [p.label for p in Policy] == ['BEST', 'WORST', 'FIRST', 'NEXTFIT']

    def test_order_names(self) -> None:
        assert Order.from_name('ADDRSORT') is Order.BY_ADDRESS
        assert Order.from_name('SIZESORT+') is Order.BY_SIZE_ASC
        assert Order.from_name('SIZESORT-') is Order.BY_SIZE_DESC

    def test_unknown_names(self) -> None:
        with pytest.raises(ConfigurationError, match='Invalid policy: best'):
            Policy.from_name('best')
        with pytest.raises(ConfigurationError, match='Invalid order: SIZESORT'):
            Order.from_name('SIZESORT')


class TestHeapConfig:
    def test_defaults(self) -> None:
        config = HeapConfig()
        assert config.size == 100
        assert config.base_address == 1000
        assert config.header_size == 0
        assert config.policy is Policy.BEST
        assert config.order is Order.BY_ADDRESS
        assert config.coalesce is False
        assert config.end_address == 1100

    def test_invalid(self) -> None:
        with pytest.raises(ConfigurationError):
            HeapConfig(size=0)
        with pytest.raises(ConfigurationError):
            HeapConfig(base_address=-1)
        with pytest.raises(ConfigurationError):
            HeapConfig(header_size=-4)
        with pytest.raises(ConfigurationError):
            HeapConfig(policy='BEST')  # type: ignore
        with pytest.raises(ConfigurationError):
            HeapConfig(order=None)  # type: ignore

    def test_error_hierarchy(self) -> None:
        with pytest.raises(ValueError):
            HeapConfig(size=-1)
        with pytest.raises(FreesimError):
            HeapConfig(size=-1)

    def test_immutable(self) -> None:
        config = HeapConfig()
        with pytest.raises(AttributeError):
            config.size = 5  # type: ignore

    def test_eq_hash(self) -> None:
        assert HeapConfig(header_size=2) == HeapConfig(header_size=2)
        assert hash(HeapConfig(coalesce=True)) == hash(HeapConfig(coalesce=True))
        assert HeapConfig() != HeapConfig(policy=Policy.FIRST)

    def test_repr(self) -> None:
        config = HeapConfig(size=64, base_address=0x100, header_size=8,
                            policy=Policy.NEXTFIT, order=Order.BY_SIZE_ASC,
                            coalesce=True)
        assert repr(config) == (
            '<HeapConfig 64 bytes @0x100, header 8, NEXTFIT, SIZESORT+, '
            'coalesce on>')
