#!/usr/bin/env python3
"""
Quantum 벤치마크 테스트

버그 의심 기준:
1. 메트릭이 음수이거나 범위를 벗어나는 경우 (CPU 이용률 0~100, fairness 0~1)
2. 승자가 비교 대상 quantum 밖에 있는 경우
3. 신뢰구간이 평균을 포함하지 않는 경우
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dataclasses import replace
import pytest
from analysis import insights
from benchmark.tests import ALL_TESTS, TEST_CATEGORIES, BenchmarkTest, get_test_by_id, get_tests_by_category
from benchmark.runner import run_benchmark, run_and_report
from simulator.simulator import run_mlfq
from workload.generator import generate_workload


def small(test: BenchmarkTest) -> BenchmarkTest:
    """빠른 실행용 축소 버전"""
    return replace(test, process_count=min(test.process_count, 8), repeats=3)


def test_catalog_is_consistent():
    ids = [t.test_id for t in ALL_TESTS]
    assert len(ids) == len(set(ids))
    in_categories = [t for info in TEST_CATEGORIES.values() for t in info['tests']]
    assert sorted(t.test_id for t in in_categories) == sorted(ids)
    for category in TEST_CATEGORIES:
        assert get_tests_by_category(category)
    assert get_tests_by_category("없는 카테고리") == []


def test_get_test_by_id():
    assert get_test_by_id("quantum_mixed").workload_type == "mixed"
    with pytest.raises(ValueError):
        get_test_by_id("nope")


def test_run_benchmark_shape_and_progress():
    test = small(get_test_by_id("quantum_interactive"))
    progress = []

    results = run_benchmark(test, progress=progress.append)

    assert sorted(results) == sorted(test.quantums)
    assert all(len(runs) == test.repeats for runs in results.values())
    assert progress[-1] == pytest.approx(1.0)
    assert progress == sorted(progress)


@pytest.mark.parametrize("test", ALL_TESTS, ids=lambda t: t.test_id)
def test_reports_have_sane_values(test):
    report = run_and_report(small(test))

    assert report['winner'] in test.quantums
    assert report['baseline'] == min(test.quantums)
    assert report['insights']

    for quantum, stats_by_metric in report['statistics'].items():
        for metric, s in stats_by_metric.items():
            assert s['min'] >= 0, f"{metric} 음수 (quantum={quantum})"
            assert s['ci_lower'] <= s['mean'] + 1e-9 <= s['ci_upper'] + 2e-9
        assert stats_by_metric['cpu_utilization']['max'] <= 100.0
        assert 0.0 < stats_by_metric['fairness']['max'] <= 1.0


def test_run_metrics_counts_demotions():
    processes = generate_workload("same_arrival", 7, seed=0)
    result = run_mlfq(processes, quantum=1)

    metrics = insights.calculate_run_metrics(result)

    # burst >= 5 이므로 quantum 1이면 모두 한 번은 강등
    assert metrics['demotions'] >= 7
    assert metrics['promotions'] > 0
    assert 0 < metrics['fairness'] <= 1.0


def test_statistics_helpers():
    constant = insights.calculate_statistics([4.0, 4.0, 4.0])
    assert constant['std'] == 0.0
    assert constant['ci_lower'] == constant['ci_upper'] == 4.0

    single = insights.calculate_statistics([2.0])
    assert single['mean'] == 2.0
    assert insights.calculate_statistics([]) == {}

    spread = insights.calculate_statistics([1.0, 2.0, 3.0, 4.0])
    assert spread['ci_lower'] < 2.5 < spread['ci_upper']


def test_significance_and_jain_index():
    result = insights.test_statistical_significance([1, 2, 1, 2, 1], [10, 11, 10, 12, 11])
    assert result['significant']
    assert result['effect_size'] < 0

    assert insights.test_statistical_significance([1], [2]) == {}
    assert insights.test_statistical_significance([3, 3], [3, 3])['significant'] is False

    assert insights.calculate_jains_index([1.0, 1.0, 1.0]) == pytest.approx(1.0)
    assert insights.calculate_jains_index([1.0, 0.0]) == pytest.approx(0.5)


def test_quantum_report_picks_lowest_wait():
    runs = {
        2: [{m: 10.0 for m in insights.LOWER_IS_BETTER + insights.HIGHER_IS_BETTER}] * 3,
        4: [{m: 5.0 for m in insights.LOWER_IS_BETTER + insights.HIGHER_IS_BETTER}] * 3,
    }

    report = insights.generate_quantum_report(runs, primary_metric='avg_waiting_time')

    assert report['winner'] == 4
    assert report['improvements'] == {'q4_vs_q2': pytest.approx(50.0)}

    utilization = insights.generate_quantum_report(runs, primary_metric='cpu_utilization')
    assert utilization['winner'] == 2

    with pytest.raises(ValueError):
        insights.generate_quantum_report(runs, primary_metric='vruntime')


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
