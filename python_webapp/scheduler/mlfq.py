"""
MLFQ 스케줄러 (4-Queue)

핵심:
  - 엄격한 큐 우선순위: Q0 > Q1 > Q2 > Q3
  - Q0에서 quantum을 다 쓰면 Q1으로 강등
  - Starvation 방지: 큐 대기 횟수가 임계값 이상이면 한 단계 승격
    (Q3→Q2, Q2→Q1, Q1→Q0 순서로 검사, 한 패스에 최대 한 단계)
"""
import logging
from typing import Iterable, List, Optional, Tuple
from .process import Process, QueueLevel
from .queues import QueueSet
from .config import STARVATION_THRESHOLD

logger = logging.getLogger(__name__)

# (출발 큐, 도착 큐) - 검사 순서 고정
PROMOTION_ORDER = (
    (QueueLevel.Q3, QueueLevel.Q2),
    (QueueLevel.Q2, QueueLevel.Q1),
    (QueueLevel.Q1, QueueLevel.Q0),
)


class MLFQScheduler:
    """Multi-Level Feedback Queue Scheduler"""

    def __init__(self, starvation_threshold: int = STARVATION_THRESHOLD):
        self.queues = QueueSet()
        self.starvation_threshold = starvation_threshold

    def enqueue(self, process: Process, level: QueueLevel):
        """큐 전이: current_queue 갱신 + 대기 카운터 초기화"""
        process.current_queue = level
        process.queue_wait_time = 0
        self.queues.push(level, process)

    def add_process(self, process: Process):
        """새로 도착한 프로세스는 항상 Q0"""
        self.enqueue(process, QueueLevel.Q0)

    def demote(self, process: Process):
        """Q0 quantum 소진 → Q1"""
        self.enqueue(process, QueueLevel.Q1)

    def requeue(self, process: Process):
        """Q3 1 tick 실행 후 재삽입 (남은 시간 기준 재정렬)"""
        self.enqueue(process, QueueLevel.Q3)

    def age(self, processes: Iterable[Process]):
        """배정되었고 완료되지 않은 모든 프로세스의 대기 카운터 +1"""
        for process in processes:
            if not process.completed and process.current_queue != QueueLevel.UNASSIGNED:
                process.queue_wait_time += 1

    def pick_next(self) -> Optional[Tuple[QueueLevel, Process]]:
        """가장 높은 비어있지 않은 큐의 head 선택 (디스패치도 큐 전이이므로 대기 카운터 초기화)"""
        level = self.queues.highest_nonempty()
        if level is None:
            return None
        process = self.queues.pop(level)
        process.queue_wait_time = 0
        return level, process

    def promote(self) -> List[Tuple[Process, QueueLevel, QueueLevel]]:
        """
        Starvation 방지 승격

        Returns:
            (프로세스, 출발 큐, 도착 큐) 리스트 (승격 순서)
        """
        promoted = []
        for src, dst in PROMOTION_ORDER:
            starving = [
                p for p in self.queues.residents(src)
                if p.queue_wait_time >= self.starvation_threshold
            ]
            for process in starving:
                self.queues.remove(src, process)
                self.enqueue(process, dst)
                promoted.append((process, src, dst))
                logger.debug("%s promoted from %s to %s", process.label, src.label, dst.label)
        return promoted
