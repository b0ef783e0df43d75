"""
워크로드 생성

특징:
  - 5가지 워크로드 (interactive / cpu_bound / mixed / staggered / same_arrival)
  - 프로세스 수는 MAX_PROCESSES 이하
  - Random seed 고정 (재현성)
"""
import random
from typing import List, Optional
from scheduler.process import Process
from scheduler.config import PRIORITY_MIN, PRIORITY_MAX

# 기본 설정
DEFAULT_WORKLOAD = "mixed"
DEFAULT_PROCESS_COUNT = 10
DEFAULT_SEED = 42


def generate_default_workload(seed: Optional[int] = DEFAULT_SEED) -> List[Process]:
    """기본 워크로드 (Mixed, 10 프로세스)"""
    return generate_mixed(DEFAULT_PROCESS_COUNT, seed=seed)


def generate_interactive(count: int, seed: Optional[int] = None) -> List[Process]:
    """
    Interactive 워크로드

    특성: 짧은 burst (1-6), 촘촘한 도착
    용도: 대부분 Q0에서 끝나는 경우
    """
    if seed is not None:
        random.seed(seed)

    processes = []
    for i in range(count):
        processes.append(Process(
            pid=i + 1,
            arrival_time=random.randint(0, count * 2),
            burst_time=random.randint(1, 6),
            priority=random.randint(PRIORITY_MIN, PRIORITY_MAX),
        ))
    return processes


def generate_cpu_bound(count: int, seed: Optional[int] = None) -> List[Process]:
    """
    CPU-bound 워크로드

    특성: 긴 burst (20-60), 초반에 몰려서 도착
    용도: Q1(SJF)까지 내려가는 경우, Q1→Q0 승격 관찰
    """
    if seed is not None:
        random.seed(seed)

    processes = []
    for i in range(count):
        processes.append(Process(
            pid=i + 1,
            arrival_time=random.randint(0, 10),
            burst_time=random.randint(20, 60),
            priority=random.randint(PRIORITY_MIN, PRIORITY_MAX),
        ))
    return processes


def generate_mixed(count: int, seed: Optional[int] = None) -> List[Process]:
    """
    Mixed 워크로드

    특성: 짧은 작업 70% + 긴 작업 30%
    용도: 일반적인 시스템
    """
    if seed is not None:
        random.seed(seed)

    processes = []
    for i in range(count):
        if random.random() < 0.7:
            burst = random.randint(1, 8)
        else:
            burst = random.randint(15, 40)
        processes.append(Process(
            pid=i + 1,
            arrival_time=random.randint(0, count * 3),
            burst_time=burst,
            priority=random.randint(PRIORITY_MIN, PRIORITY_MAX),
        ))
    return processes


def generate_staggered(count: int, seed: Optional[int] = None) -> List[Process]:
    """
    Staggered 워크로드

    특성: 도착 간격이 burst보다 길 수 있음 → idle 구간 발생
    """
    if seed is not None:
        random.seed(seed)

    processes = []
    arrival = 0
    for i in range(count):
        burst = random.randint(1, 5)
        processes.append(Process(
            pid=i + 1,
            arrival_time=arrival,
            burst_time=burst,
            priority=random.randint(PRIORITY_MIN, PRIORITY_MAX),
        ))
        arrival += burst + random.randint(0, 4)
    return processes


def generate_same_arrival(count: int, seed: Optional[int] = None) -> List[Process]:
    """
    동시 도착 워크로드

    특성: 모두 t=0 도착, burst 5-30
    용도: Q1 대기열이 길어지는 경우 (starvation 승격)
    """
    if seed is not None:
        random.seed(seed)

    processes = []
    for i in range(count):
        processes.append(Process(
            pid=i + 1,
            arrival_time=0,
            burst_time=random.randint(5, 30),
            priority=random.randint(PRIORITY_MIN, PRIORITY_MAX),
        ))
    return processes


# ========== 워크로드 팩토리 ==========

WORKLOAD_GENERATORS = {
    "interactive": generate_interactive,
    "cpu_bound": generate_cpu_bound,
    "mixed": generate_mixed,
    "staggered": generate_staggered,
    "same_arrival": generate_same_arrival,
}


def generate_workload(workload_type: str, count: int, seed: Optional[int] = None) -> List[Process]:
    """
    워크로드 생성 팩토리

    Args:
        workload_type: 워크로드 종류
        count: 프로세스 수
        seed: Random seed

    Returns:
        프로세스 리스트
    """
    generator = WORKLOAD_GENERATORS.get(workload_type)
    if generator is None:
        raise ValueError(f"Unknown workload: {workload_type}")

    return generator(count, seed)
