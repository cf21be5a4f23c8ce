from __future__ import annotations

import pytest

from lcg_keys.errors import InvalidModulusError
from lcg_keys.parameter_analysis import find_parameters
from lcg_keys.utils.entities import LinearCongruentialGenerator, MultiHopDriver, PresetGenerator


@pytest.fixture
def request_key_driver() -> MultiHopDriver:
    preset = PresetGenerator.PRESETS["request_keys"]
    return MultiHopDriver(preset["a"], preset["c"], preset["m"])


def test_two_hops_cover_whole_ring_in_different_order() -> None:
    driver = MultiHopDriver(a=11, c=3, m=10)
    multi_hop = list(driver.values())
    feedback = LinearCongruentialGenerator(a=11, c=3, m=10).generate_sequence(10)

    assert set(multi_hop) == set(feedback) == set(range(10))
    assert multi_hop != feedback
    assert multi_hop == [6, 7, 8, 9, 0, 1, 2, 3, 4, 5]


@pytest.mark.parametrize("m", [16, 97, 100, 360, 1000])
@pytest.mark.parametrize("hops", [2, 3, 5])
def test_multi_hop_is_permutation(m: int, hops: int) -> None:
    driver = MultiHopDriver.from_parameters(find_parameters(m), hops=hops)
    values = list(driver.values())
    assert len(values) == m
    assert sorted(values) == list(range(m))


def test_reference_keys_for_first_indices(request_key_driver: MultiHopDriver) -> None:
    assert request_key_driver.value_for(0) == 828
    assert request_key_driver.key_for(0) == "B22222YK"
    assert request_key_driver.value_for(1) == 689_996_466
    assert request_key_driver.key_for(1) == "B37MKBML"


def test_two_hops_near_cycle_of_twenty_five(request_key_driver: MultiHopDriver) -> None:
    assert request_key_driver.key_for(25) == "B2222MEF"
    assert request_key_driver.value_for(50) == 30_110


def test_third_hop(request_key_driver: MultiHopDriver) -> None:
    driver = MultiHopDriver(request_key_driver.a, request_key_driver.c, request_key_driver.m, hops=3)
    assert driver.value_for(0) == 12_814_213_900
    assert driver.key_for(0) == "BQJQKKEU"


def test_values_window(request_key_driver: MultiHopDriver) -> None:
    assert list(request_key_driver.values(start=0, count=2)) == [828, 689_996_466]


@pytest.mark.parametrize("hops", [0, 1])
def test_too_few_hops_rejected(hops: int) -> None:
    with pytest.raises(ValueError):
        MultiHopDriver(a=11, c=3, m=10, hops=hops)


def test_identity_hop_count_rejected() -> None:
    with pytest.raises(ValueError):
        MultiHopDriver(a=11, c=3, m=10, hops=10)


@pytest.mark.parametrize("index", [-1, 10])
def test_index_outside_ring_rejected(index: int) -> None:
    with pytest.raises(ValueError):
        MultiHopDriver(a=11, c=3, m=10).value_for(index)


@pytest.mark.parametrize("m", [-3, 0, 1])
def test_invalid_modulus_rejected(m: int) -> None:
    with pytest.raises(InvalidModulusError):
        MultiHopDriver(a=11, c=3, m=m)
