"""프로세스 레코드 / Gantt 항목"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Optional


class QueueLevel(IntEnum):
    UNASSIGNED = -1
    Q0 = 0  # Round Robin
    Q1 = 1  # SJF
    Q2 = 2  # Priority
    Q3 = 3  # SRTF

    @property
    def label(self) -> str:
        return QUEUE_LABELS[self]


QUEUE_LABELS = {
    QueueLevel.UNASSIGNED: "Unassigned",
    QueueLevel.Q0: "Q0 (Round Robin)",
    QueueLevel.Q1: "Q1 (SJF)",
    QueueLevel.Q2: "Q2 (Priority)",
    QueueLevel.Q3: "Q3 (SRTF)",
}


@dataclass(eq=False)
class Process:
    """
    시뮬레이션 프로세스

    시뮬레이터가 소유한 단일 객체를 큐에 참조로 넣고 제자리에서 수정한다.
    정렬 큐(Q1~Q3) 안에 있는 동안에는 정렬 키를 바꾸지 않는다.
    """
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 1  # 1(최고) ~ 10(최저)

    remaining_time: int = -1  # -1이면 burst_time으로 초기화
    current_queue: QueueLevel = QueueLevel.UNASSIGNED
    queue_wait_time: int = 0

    # 통계
    start_time: int = -1
    completion_time: int = 0
    waiting_time: int = 0
    turnaround_time: int = 0
    response_time: int = 0
    completed: bool = False

    def __post_init__(self):
        if self.remaining_time < 0:
            self.remaining_time = self.burst_time
        self.current_queue = QueueLevel(self.current_queue)

    @property
    def label(self) -> str:
        return f"P{self.pid}"

    def reset(self):
        """가변 필드 초기화 (같은 워크로드 재실행용)"""
        self.remaining_time = self.burst_time
        self.current_queue = QueueLevel.UNASSIGNED
        self.queue_wait_time = 0
        self.start_time = -1
        self.completion_time = 0
        self.waiting_time = 0
        self.turnaround_time = 0
        self.response_time = 0
        self.completed = False

    def __repr__(self):
        return (f"Process({self.pid}, q={self.current_queue.name}, "
                f"rem={self.remaining_time}, wait={self.queue_wait_time})")


@dataclass(frozen=True)
class GanttEntry:
    """실행(또는 idle) 구간 하나"""
    pid: Optional[int]  # None = idle
    start: int
    end: int

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        return "Idle" if self.is_idle else f"P{self.pid}"

    def __str__(self):
        return f"{self.label}({self.start}-{self.end})"
