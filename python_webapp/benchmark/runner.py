"""벤치마크 실행 (quantum별 반복 시뮬레이션)"""

import logging
from copy import deepcopy
from typing import Callable, Dict, List, Optional
from scheduler.config import MLFQConfig
from simulator.simulator import run_mlfq
from workload.generator import generate_workload
from analysis.insights import calculate_run_metrics, generate_quantum_report
from benchmark.tests import BenchmarkTest

logger = logging.getLogger(__name__)


def run_benchmark(test: BenchmarkTest,
                  progress: Optional[Callable[[float], None]] = None) -> Dict[int, List[Dict]]:
    """
    Returns:
        {quantum: [seed별 run metrics]}
    """
    config = MLFQConfig(starvation_threshold=test.starvation_threshold)
    results: Dict[int, List[Dict]] = {q: [] for q in test.quantums}
    total = len(test.quantums) * test.repeats
    done = 0

    for seed in range(test.repeats):
        # 같은 seed 워크로드를 모든 quantum에 사용
        base_processes = generate_workload(test.workload_type, test.process_count, seed=seed)
        for quantum in test.quantums:
            processes = deepcopy(base_processes)
            result = run_mlfq(processes, quantum, config)
            results[quantum].append(calculate_run_metrics(result))

            done += 1
            if progress is not None:
                progress(done / total)

    logger.info("Benchmark %s finished: %d runs", test.test_id, total)
    return results


def run_and_report(test: BenchmarkTest,
                   progress: Optional[Callable[[float], None]] = None) -> Dict:
    """벤치마크 실행 + 리포트"""
    results = run_benchmark(test, progress)
    return generate_quantum_report(results, primary_metric=test.primary_metric)
