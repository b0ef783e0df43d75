"""
MLFQ 시뮬레이션 설정

기본값은 원래 콘솔 프로그램의 상수와 동일:
  - 최대 프로세스 수: 100
  - Gantt 최대 항목 수: 1000 (초과분은 버리고 경고 1회)
  - Starvation 임계값: 5 (큐 대기 5회 이상이면 한 단계 승격)
"""
from dataclasses import dataclass

MAX_PROCESSES = 100
MAX_GANTT_ENTRIES = 1000
STARVATION_THRESHOLD = 5

PRIORITY_MIN = 1   # 가장 높은 우선순위
PRIORITY_MAX = 10  # 가장 낮은 우선순위

DEFAULT_QUANTUM = 4


@dataclass
class MLFQConfig:
    """시뮬레이터 생성자에 전달하는 설정"""
    quantum: int = DEFAULT_QUANTUM
    starvation_threshold: int = STARVATION_THRESHOLD
    max_processes: int = MAX_PROCESSES
    max_gantt_entries: int = MAX_GANTT_ENTRIES
