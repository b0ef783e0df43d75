"""
성능 메트릭 계산

프로세스별 최종값(waiting/turnaround/response)은 완료 시점에 이미 확정되어 있고,
여기서는 평균과 CPU 이용률만 집계한다.
"""

from typing import List, Dict, Iterable
import numpy as np
from scheduler.process import Process, GanttEntry


def calculate_avg_wait_time(processes: List[Process]) -> float:
    """평균 대기 시간 계산"""
    total_wait = sum(p.waiting_time for p in processes)
    return total_wait / len(processes) if processes else 0.0


def calculate_avg_turnaround(processes: List[Process]) -> float:
    """평균 반환 시간 계산"""
    total_turnaround = sum(p.turnaround_time for p in processes)
    return total_turnaround / len(processes) if processes else 0.0


def calculate_avg_response(processes: List[Process]) -> float:
    """평균 응답 시간 계산 (start_time - arrival_time)"""
    total_response = sum(p.response_time for p in processes)
    return total_response / len(processes) if processes else 0.0


def calculate_busy_ticks(entries: Iterable[GanttEntry]) -> int:
    """idle이 아닌 Gantt 구간 길이 합"""
    return sum(e.duration for e in entries if not e.is_idle)


def calculate_cpu_utilization(busy_ticks: int, elapsed_ticks: int) -> float:
    """CPU 이용률 (%)"""
    if elapsed_ticks <= 0:
        return 0.0
    return 100.0 * busy_ticks / elapsed_ticks


def calculate_throughput(processes: List[Process]) -> float:
    """처리량 계산 (processes/tick)"""
    completed = [p for p in processes if p.completed]
    if not completed:
        return 0.0

    max_finish = max(p.completion_time for p in completed)
    min_arrival = min(p.arrival_time for p in processes)

    total_time = max_finish - min_arrival
    if total_time == 0:
        return 0.0

    return len(completed) / total_time


def calculate_p99(values: List[float]) -> float:
    """99 퍼센타일"""
    return float(np.percentile(values, 99)) if values else 0.0


def summarize_metrics(processes: List[Process], busy_ticks: int, elapsed_ticks: int) -> Dict[str, float]:
    """
    최종 집계

    Returns:
        avg_waiting_time, avg_turnaround_time, avg_response_time,
        cpu_utilization, busy_ticks, elapsed_ticks, throughput
    """
    return {
        'avg_waiting_time': calculate_avg_wait_time(processes),
        'avg_turnaround_time': calculate_avg_turnaround(processes),
        'avg_response_time': calculate_avg_response(processes),
        'cpu_utilization': calculate_cpu_utilization(busy_ticks, elapsed_ticks),
        'busy_ticks': busy_ticks,
        'elapsed_ticks': elapsed_ticks,
        'throughput': calculate_throughput(processes),
    }
