from __future__ import annotations

import math

import pytest

from lcg_keys.parameter_analysis import LcgParameters, find_parameters
from lcg_keys.quality import SequenceQualityAnalyzer, feedback_values, index_driven_values, main
from lcg_keys.utils.entities import DEFAULT_KEYSPACE, PresetGenerator


def _preset(name: str) -> LcgParameters:
    preset = PresetGenerator.PRESETS[name]
    return LcgParameters(a=preset["a"], c=preset["c"], m=preset["m"])


@pytest.fixture
def analyzer() -> SequenceQualityAnalyzer:
    return SequenceQualityAnalyzer()


def test_index_and_feedback_drivers() -> None:
    params = find_parameters(10)
    assert index_driven_values(params, 10, hops=1) == [3, 4, 5, 6, 7, 8, 9, 0, 1, 2]
    assert index_driven_values(params, 10, hops=2) == [6, 7, 8, 9, 0, 1, 2, 3, 4, 5]
    assert feedback_values(params, 10) == [3, 6, 9, 2, 5, 8, 1, 4, 7, 0]
    # окно не выходит за кольцо
    assert len(index_driven_values(params, 50, hops=1, start=5)) == 5


def test_near_cycle_grows_with_hops(analyzer: SequenceQualityAnalyzer) -> None:
    params = _preset("request_keys")
    spans = {
        hops: analyzer.shortest_near_cycle(index_driven_values(params, 300, hops=hops), params.m)
        for hops in (1, 2, 3)
    }
    assert spans == {1: 5, 2: 25, 3: 125}


def test_shared_prefix_follows_near_cycle(analyzer: SequenceQualityAnalyzer) -> None:
    params = _preset("request_keys")
    keys = [DEFAULT_KEYSPACE.encode(v) for v in index_driven_values(params, 200, hops=2)]
    assert analyzer.shared_prefix_ratio(keys, span=25) > 0.3
    assert analyzer.shared_prefix_ratio(keys, span=1) < 0.1


def test_shared_prefix_needs_enough_keys(analyzer: SequenceQualityAnalyzer) -> None:
    with pytest.raises(ValueError):
        analyzer.shared_prefix_ratio(["B2222222"], span=1)


def test_full_cycle_is_exactly_uniform(analyzer: SequenceQualityAnalyzer) -> None:
    params = _preset("demo_100")
    result = analyzer.test_uniformity_chi2(feedback_values(params, 100), params.m)
    assert result['is_uniform']
    assert result['chi2_statistic'] == 0.0
    assert result['p_value'] == pytest.approx(1.0)
    assert result['degrees_of_freedom'] == result['n_bins'] - 1


def test_constant_sequence_is_not_uniform(analyzer: SequenceQualityAnalyzer) -> None:
    assert not analyzer.test_uniformity_chi2([0] * 100, 100)['is_uniform']
    assert 'reason' in analyzer.test_uniformity_chi2([1, 2, 3], 100)


def test_serial_correlation(analyzer: SequenceQualityAnalyzer) -> None:
    assert analyzer.serial_correlation(list(range(50))) == pytest.approx(1.0)
    assert math.isnan(analyzer.serial_correlation([7] * 20))
    with pytest.raises(ValueError):
        analyzer.serial_correlation([1, 2])


def test_key_table(analyzer: SequenceQualityAnalyzer) -> None:
    table = analyzer.key_table(_preset("request_keys"), range(3))
    assert list(table.columns) == ['index', 'value', 'key']
    assert table['key'].tolist()[:2] == ["B22222YK", "B37MKBML"]
    assert table['value'].tolist()[0] == 828


def test_compare_drivers(analyzer: SequenceQualityAnalyzer) -> None:
    table = analyzer.compare_drivers(_preset("request_keys"), count=300)
    assert table.index.tolist() == ["index x1", "index x2", "index x3", "feedback"]
    assert table.loc["index x1", "near_cycle"] == 5
    assert table.loc["index x2", "near_cycle"] == 25
    assert set(table.columns) == {'serial_correlation', 'p_value_uniform', 'near_cycle', 'shared_prefix'}


def test_main_prints_first_keys(capsys: pytest.CaptureFixture[str], tmp_path) -> None:
    plot = tmp_path / "pairs.png"
    assert main(["--preset", "request_keys", "--count", "3", "--plot", str(plot)]) == 0
    out = capsys.readouterr().out
    assert "B22222YK" in out
    assert "B37MKBML" in out
    assert plot.exists()


def test_main_with_found_parameters(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--modulus", "100", "--count", "5"]) == 0
    assert "% 100" in capsys.readouterr().out


@pytest.mark.parametrize("m", [3, 5, 7])
def test_main_with_tiny_modulus(capsys: pytest.CaptureFixture[str], m: int) -> None:
    assert main(["--modulus", str(m), "--count", "3"]) == 0
    assert f"% {m}" in capsys.readouterr().out


def test_main_rejects_identity_hops_for_modulus() -> None:
    # два прыжка по кольцу из двух значений возвращают номер
    with pytest.raises(SystemExit) as excinfo:
        main(["--modulus", "2", "--count", "3"])
    assert excinfo.value.code == 2


def test_main_with_modulus_two_and_odd_hops(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--modulus", "2", "--hops", "3"]) == 0
    assert "index x2" not in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["--modulus", "1"], ["--hops", "0"]])
def test_main_rejects_bad_arguments(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        main(argv)


def test_compare_drivers_on_tiny_ring(analyzer: SequenceQualityAnalyzer) -> None:
    params = find_parameters(3)
    table = analyzer.compare_drivers(params, count=3)
    assert table.index.tolist() == ["index x1", "index x2", "feedback"]
    assert table['shared_prefix'].isna().all()

    table = analyzer.compare_drivers(find_parameters(2), count=2)
    assert table.index.tolist() == ["index x1", "index x3", "feedback"]
    assert table['serial_correlation'].isna().all()
