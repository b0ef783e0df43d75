"""
자동 Insight 생성 (quantum 비교 + 통계)

과학적 실험 원칙:
  - 반복 측정 (seed별) → 평균/표준편차/95% 신뢰구간
  - 통계적 유의성 검증 (t-test)

메트릭 분류:
  [낮을수록 좋음]
    - avg_waiting_time / avg_turnaround_time / avg_response_time
    - p99_waiting_time: 99 퍼센타일 대기 시간 (테일 레이턴시)

  [높을수록 좋음]
    - cpu_utilization: CPU 이용률 %
    - fairness: slowdown(turnaround/burst)에 대한 Jain's Fairness Index
"""
from typing import List, Dict
import numpy as np
from scipy import stats
from analysis.metrics import calculate_p99

LOWER_IS_BETTER = ['avg_waiting_time', 'avg_turnaround_time', 'avg_response_time',
                   'p99_waiting_time', 'promotions', 'demotions']
HIGHER_IS_BETTER = ['cpu_utilization', 'fairness']


def calculate_jains_index(values: List[float]) -> float:
    """
    Jain's Fairness Index

    정의: J = (Σx_i)^2 / (n * Σx_i^2)

    해석:
      - 1.0: 완전 공정 (모두 동일)
      - 1/n: 한 프로세스만 불리
    """
    if not values:
        return 0.0
    n = len(values)
    sum_x = sum(values)
    sum_x2 = sum(x*x for x in values)
    return (sum_x ** 2) / (n * sum_x2) if sum_x2 > 0 else 0.0


def calculate_statistics(values: List[float]) -> Dict:
    """
    통계량 계산 (반복 측정용)

    Returns:
        mean, std, min, max, ci_lower, ci_upper (95% 신뢰구간)
    """
    if not values:
        return {}

    mean = float(np.mean(values))
    n = len(values)
    if n < 2:
        return {'mean': mean, 'std': 0.0, 'min': mean, 'max': mean,
                'ci_lower': mean, 'ci_upper': mean}

    std = float(np.std(values, ddof=1))  # 표본 표준편차
    if std == 0:
        ci = (mean, mean)
    else:
        # 95% 신뢰구간 계산 (t-distribution)
        ci = stats.t.interval(0.95, n-1, loc=mean, scale=std/np.sqrt(n))

    return {
        'mean': mean,
        'std': std,
        'min': float(np.min(values)),
        'max': float(np.max(values)),
        'ci_lower': float(ci[0]),
        'ci_upper': float(ci[1])
    }


def test_statistical_significance(values_a: List[float], values_b: List[float]) -> Dict:
    """
    통계적 유의성 검증 (t-test)

    Returns:
        t_statistic, p_value, significant (p < 0.05), effect_size (Cohen's d)
    """
    if len(values_a) < 2 or len(values_b) < 2:
        return {}

    pooled_std = np.sqrt((np.std(values_a, ddof=1)**2 + np.std(values_b, ddof=1)**2) / 2)
    if pooled_std == 0:
        # 분산이 0이면 t-test 정의 안 됨
        same = np.mean(values_a) == np.mean(values_b)
        return {'t_statistic': 0.0, 'p_value': 1.0 if same else 0.0,
                'significant': not same, 'effect_size': 0.0}

    t_stat, p_value = stats.ttest_ind(values_a, values_b)
    cohens_d = (np.mean(values_a) - np.mean(values_b)) / pooled_std

    return {
        't_statistic': float(t_stat),
        'p_value': float(p_value),
        'significant': bool(p_value < 0.05),
        'effect_size': float(cohens_d)
    }


def calculate_run_metrics(result) -> Dict:
    """
    시뮬레이션 1회 메트릭

    Args:
        result: SimulationResult
    """
    processes = result.processes
    waiting = [p.waiting_time for p in processes]
    slowdowns = [p.turnaround_time / p.burst_time for p in processes if p.burst_time > 0]

    events = result.events
    promotions = int((events['event'] == 'PROMOTED').sum()) if not events.empty else 0
    demotions = int((events['event'] == 'DEMOTED').sum()) if not events.empty else 0

    return {
        'avg_waiting_time': round(result.metrics['avg_waiting_time'], 2),
        'avg_turnaround_time': round(result.metrics['avg_turnaround_time'], 2),
        'avg_response_time': round(result.metrics['avg_response_time'], 2),
        'cpu_utilization': round(result.metrics['cpu_utilization'], 2),
        'p99_waiting_time': round(calculate_p99(waiting), 2),
        'fairness': round(calculate_jains_index(slowdowns), 4),
        'promotions': promotions,
        'demotions': demotions,
    }


def generate_quantum_report(
    quantum_results: Dict[int, List[Dict]],
    primary_metric: str = 'avg_waiting_time'
) -> Dict:
    """
    quantum별 비교 리포트 생성

    Args:
        quantum_results: {quantum: [run_metrics, ...]} 형태
        primary_metric: 주요 비교 메트릭

    Returns:
        statistics, baseline, winner, improvements, significance, insights
    """
    if primary_metric not in LOWER_IS_BETTER and primary_metric not in HIGHER_IS_BETTER:
        raise ValueError(f"Unknown metric: {primary_metric}")

    statistics = {}
    for quantum, runs in quantum_results.items():
        statistics[quantum] = {
            metric: calculate_statistics([run[metric] for run in runs])
            for metric in LOWER_IS_BETTER + HIGHER_IS_BETTER
        }

    # Baseline: 가장 작은 quantum
    quantums = sorted(quantum_results.keys())
    baseline = quantums[0]
    means = {q: statistics[q][primary_metric].get('mean', 0.0) for q in quantums}

    if primary_metric in LOWER_IS_BETTER:
        winner = min(quantums, key=lambda q: means[q])
    else:
        winner = max(quantums, key=lambda q: means[q])

    # 개선율 계산
    improvements = {}
    baseline_value = means[baseline]
    for q in quantums:
        if q == baseline:
            continue
        current_value = means[q]
        if primary_metric in LOWER_IS_BETTER:
            if baseline_value > 1.0:
                improvement = (baseline_value - current_value) / baseline_value * 100
            else:
                improvement = baseline_value - current_value
        else:
            if baseline_value > 0.01:
                improvement = (current_value - baseline_value) / baseline_value * 100
            else:
                improvement = current_value - baseline_value
        improvements[f"q{q}_vs_q{baseline}"] = improvement

    significance = {}
    if winner != baseline:
        significance = test_statistical_significance(
            [run[primary_metric] for run in quantum_results[winner]],
            [run[primary_metric] for run in quantum_results[baseline]],
        )

    insights = _generate_insights(statistics, quantums, winner, baseline,
                                  primary_metric, significance)

    return {
        'statistics': statistics,
        'means': means,
        'baseline': baseline,
        'winner': winner,
        'improvements': improvements,
        'significance': significance,
        'insights': insights,
    }


def _generate_insights(statistics: Dict, quantums: List[int], winner: int, baseline: int,
                       primary_metric: str, significance: Dict) -> List[str]:
    insights = []
    winner_stats = statistics[winner][primary_metric]
    insights.append(
        f"🏆 quantum={winner}: {primary_metric} 평균 {winner_stats['mean']:.2f} "
        f"(95% CI {winner_stats['ci_lower']:.2f} ~ {winner_stats['ci_upper']:.2f})"
    )

    if significance:
        if significance['significant']:
            insights.append(
                f"📊 quantum={winner} vs quantum={baseline}: 통계적으로 유의미 "
                f"(p={significance['p_value']:.4f}, d={significance['effect_size']:.2f})"
            )
        else:
            insights.append(
                f"📊 quantum={winner} vs quantum={baseline}: 차이가 유의미하지 않음 "
                f"(p={significance['p_value']:.4f})"
            )

    # 강등/승격 추세
    demotions = {q: statistics[q]['demotions']['mean'] for q in quantums}
    promotions = {q: statistics[q]['promotions']['mean'] for q in quantums}
    smallest, largest = quantums[0], quantums[-1]
    if demotions[smallest] > demotions[largest]:
        insights.append(
            f"⬇️ quantum이 커질수록 Q1 강등 감소 "
            f"({demotions[smallest]:.1f} → {demotions[largest]:.1f}회)"
        )
    if max(promotions.values()) > 0:
        busiest = max(quantums, key=lambda q: promotions[q])
        insights.append(
            f"⬆️ Starvation 승격이 가장 많은 quantum={busiest} "
            f"(평균 {promotions[busiest]:.1f}회)"
        )

    return insights
