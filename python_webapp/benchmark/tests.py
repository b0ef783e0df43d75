"""
Quantum 벤치마크 테스트 정의 (Goal-based)

설계 원칙:
  - 테스트는 "목표/개념"으로 정의 (워크로드 중립)
  - 각 테스트마다 비교할 quantum 값 명시
  - 같은 seed 집합으로 반복 측정 → 평균/신뢰구간 비교
"""

from typing import List, Dict, Any
from dataclasses import dataclass

@dataclass
class BenchmarkTest:
    """벤치마크 테스트 정의"""
    test_id: str
    name: str
    goal: str  # 테스트 목표
    workload_type: str  # workload generator 타입
    process_count: int
    quantums: List[int]  # 비교할 Q0 quantum 리스트
    primary_metric: str  # 주요 측정 지표
    description: str  # 상세 설명
    repeats: int = 10  # seed 0..repeats-1 로 반복
    starvation_threshold: int = 5


# ========== 테스트 정의 ==========

TEST_QUANTUM_INTERACTIVE = BenchmarkTest(
    test_id="quantum_interactive",
    name="짧은 작업 응답성",
    goal="짧은 작업이 Q0에서 바로 끝나는 quantum 찾기",
    workload_type="interactive",
    process_count=20,
    quantums=[1, 2, 4, 8],
    primary_metric="avg_response_time",
    description="""
    Interactive 워크로드:
      - burst 1-6 ticks
      - 촘촘한 도착

    quantum이 작을수록 응답 시간은 줄지만 Q1으로 강등되는 작업이 늘어난다.
    """
)

TEST_QUANTUM_CPU = BenchmarkTest(
    test_id="quantum_cpu",
    name="긴 작업 반환 시간",
    goal="긴 작업이 SJF 단계에서 처리될 때의 반환 시간",
    workload_type="cpu_bound",
    process_count=20,
    quantums=[2, 5, 10, 20],
    primary_metric="avg_turnaround_time",
    description="""
    CPU-bound 워크로드:
      - burst 20-60 ticks
      - 0-10 tick 사이에 도착

    대부분 Q0 한 번 → Q1(SJF) 실행. quantum은 첫 조각 크기만 결정한다.
    """
)

TEST_QUANTUM_MIXED = BenchmarkTest(
    test_id="quantum_mixed",
    name="혼합 워크로드 대기 시간",
    goal="짧은/긴 작업이 섞였을 때의 평균 대기 시간",
    workload_type="mixed",
    process_count=30,
    quantums=[2, 4, 8, 16],
    primary_metric="avg_waiting_time",
    description="""
    Mixed 워크로드 (짧은 작업 70% + 긴 작업 30%)
    """
)

TEST_STARVATION = BenchmarkTest(
    test_id="starvation_same_arrival",
    name="동시 도착 Starvation 승격",
    goal="Q1 대기열이 길 때 승격이 대기 시간 편차에 주는 영향",
    workload_type="same_arrival",
    process_count=30,
    quantums=[1, 3, 6],
    primary_metric="p99_waiting_time",
    description="""
    모든 프로세스가 t=0에 도착 (burst 5-30)

    Q0를 한 바퀴 돈 뒤 Q1에 쌓인 작업들이 SJF 순서로 실행되며,
    임계값 이상 기다린 작업은 Q0으로 승격된다.
    """
)

TEST_UTILIZATION = BenchmarkTest(
    test_id="utilization_staggered",
    name="Idle 구간과 CPU 이용률",
    goal="도착 간격이 있는 워크로드에서 CPU 이용률",
    workload_type="staggered",
    process_count=15,
    quantums=[1, 2, 4],
    primary_metric="cpu_utilization",
    description="""
    Staggered 워크로드: 도착 간격이 burst보다 길 수 있어 idle 구간 발생
    """
)


# ========== 테스트 카테고리 ==========

TEST_CATEGORIES: Dict[str, Dict[str, Any]] = {
    "Quantum 크기": {
        "description": "Q0 quantum 크기에 따른 성능 변화",
        "tests": [TEST_QUANTUM_INTERACTIVE, TEST_QUANTUM_CPU, TEST_QUANTUM_MIXED]
    },
    "Starvation 방지": {
        "description": "대기 임계값 기반 승격의 효과",
        "tests": [TEST_STARVATION]
    },
    "CPU 이용률": {
        "description": "Idle 구간이 있는 워크로드",
        "tests": [TEST_UTILIZATION]
    },
}


# ========== 모든 테스트 리스트 ==========

ALL_TESTS = [
    TEST_QUANTUM_INTERACTIVE, TEST_QUANTUM_CPU, TEST_QUANTUM_MIXED,
    TEST_STARVATION,
    TEST_UTILIZATION,
]


def get_test_by_id(test_id: str) -> BenchmarkTest:
    """테스트 ID로 테스트 찾기"""
    for test in ALL_TESTS:
        if test.test_id == test_id:
            return test
    raise ValueError(f"Unknown test_id: {test_id}")


def get_tests_by_category(category: str) -> List[BenchmarkTest]:
    """카테고리별 테스트 리스트"""
    return TEST_CATEGORIES.get(category, {}).get("tests", [])
