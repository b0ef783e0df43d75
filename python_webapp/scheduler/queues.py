"""
4단계 큐 집합

  - Q0: Round Robin (FIFO, deque)
  - Q1: SJF (원래 burst_time 오름차순)
  - Q2: Priority (priority 값 오름차순, 1이 최우선)
  - Q3: SRTF (remaining_time 오름차순, 재삽입 시점 기준)

정렬 큐는 SortedList로 관리하고 동률은 (arrival_time, pid) 순서로 깬다.
"""
from collections import deque
from typing import Dict, List, Optional, Tuple
from sortedcontainers import SortedList
from .process import Process, QueueLevel

LEVELS = (QueueLevel.Q0, QueueLevel.Q1, QueueLevel.Q2, QueueLevel.Q3)


def sjf_key(p: Process) -> Tuple[int, int, int]:
    return (p.burst_time, p.arrival_time, p.pid)


def priority_key(p: Process) -> Tuple[int, int, int]:
    return (p.priority, p.arrival_time, p.pid)


def srtf_key(p: Process) -> Tuple[int, int, int]:
    return (p.remaining_time, p.arrival_time, p.pid)


class QueueSet:
    """Q0~Q3 컨테이너"""

    def __init__(self):
        self.queues = {
            QueueLevel.Q0: deque(),
            QueueLevel.Q1: SortedList(key=sjf_key),
            QueueLevel.Q2: SortedList(key=priority_key),
            QueueLevel.Q3: SortedList(key=srtf_key),
        }

    def push(self, level: QueueLevel, process: Process):
        """큐에 추가 (Q0은 뒤에, 나머지는 정렬 위치에)"""
        queue = self.queues[level]
        if level == QueueLevel.Q0:
            queue.append(process)
        else:
            queue.add(process)

    def pop(self, level: QueueLevel) -> Process:
        """해당 큐의 head 꺼내기"""
        queue = self.queues[level]
        if level == QueueLevel.Q0:
            return queue.popleft()
        return queue.pop(0)

    def remove(self, level: QueueLevel, process: Process):
        self.queues[level].remove(process)

    def is_empty(self, level: QueueLevel) -> bool:
        return not self.queues[level]

    def highest_nonempty(self) -> Optional[QueueLevel]:
        """Q0 → Q3 순서로 첫 번째 비어있지 않은 큐"""
        for level in LEVELS:
            if self.queues[level]:
                return level
        return None

    def residents(self, level: QueueLevel) -> List[Process]:
        """선택 순서대로 복사본 리스트"""
        return list(self.queues[level])

    def snapshot(self) -> Dict[QueueLevel, List[int]]:
        """큐별 pid 목록 (선택 순서)"""
        return {level: [p.pid for p in self.queues[level]] for level in LEVELS}

    def __len__(self):
        return sum(len(q) for q in self.queues.values())

    def __contains__(self, process: Process):
        return any(process in q for q in self.queues.values())
