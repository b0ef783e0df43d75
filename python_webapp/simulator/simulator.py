"""
시뮬레이션 엔진

단일 CPU MLFQ 스케줄러 시뮬레이터.
매 반복마다 도착 처리 → 디스패치 → 승격을 수행하고 결과를 기록.
모든 프로세스가 완료되면 종료 (타임아웃 없음).
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional
import pandas as pd
from scheduler.process import Process, QueueLevel, GanttEntry
from scheduler.mlfq import MLFQScheduler
from scheduler.config import MLFQConfig
from analysis.metrics import summarize_metrics
from workload.process_input import InvalidProcessInput

logger = logging.getLogger(__name__)

EVENT_COLUMNS = ['iteration', 'time', 'event', 'pid', 'queue', 'remaining_time', 'detail']


class GanttChart:
    """
    실행 구간 기록 (용량 제한)

    용량을 넘는 구간은 목록에서 빠지지만 busy/idle 합계에는 계속 반영된다.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.entries: List[GanttEntry] = []
        self.dropped = 0
        self.busy_ticks = 0
        self.idle_ticks = 0

    def record(self, pid: Optional[int], start: int, end: int) -> bool:
        if pid is None:
            self.idle_ticks += end - start
        else:
            self.busy_ticks += end - start

        if len(self.entries) >= self.capacity:
            if self.dropped == 0:
                logger.warning("Gantt chart full (%d entries), dropping later intervals", self.capacity)
            self.dropped += 1
            return False

        self.entries.append(GanttEntry(pid, start, end))
        return True


@dataclass
class SimulationResult:
    """시뮬레이션 결과"""
    processes: List[Process]
    gantt: List[GanttEntry]
    dropped_gantt_entries: int
    events: pd.DataFrame
    queue_states: pd.DataFrame
    metrics: Dict[str, float] = field(default_factory=dict)
    final_time: int = 0


class Simulator:
    """MLFQ 스케줄러 시뮬레이터"""

    def __init__(self, processes: List[Process], config: Optional[MLFQConfig] = None):
        """
        Args:
            processes: 시뮬레이션할 프로세스 리스트 (검증된 입력, pid 1부터)
            config: quantum, starvation 임계값, 최대 프로세스 수, Gantt 용량

        Raises:
            InvalidProcessInput: 프로세스 수가 config.max_processes 초과
        """
        self.config = config or MLFQConfig()
        if len(processes) > self.config.max_processes:
            raise InvalidProcessInput(
                f"Too many processes: {len(processes)} (max {self.config.max_processes})")
        self.processes = processes
        self.scheduler = MLFQScheduler(self.config.starvation_threshold)
        self.gantt = GanttChart(self.config.max_gantt_entries)
        self.current_time = 0
        self.iteration = 0
        self.history = []
        self.queue_history = []

    def run(self) -> pd.DataFrame:
        """
        모든 프로세스가 완료될 때까지 시뮬레이션 실행

        Returns:
            이벤트 로그 (DataFrame)
        """
        logger.info("Starting MLFQ simulation: %d processes, quantum=%d",
                    len(self.processes), self.config.quantum)

        while not self._all_processes_done():
            self.step()

        logger.info("Simulation finished at t=%d after %d iterations",
                    self.current_time, self.iteration)
        return self.events()

    def step(self):
        """한 번의 스케줄링 결정"""
        # 1. 새로 도착한 프로세스 → Q0, 대기 카운터 증가
        self._handle_arrivals()
        self.scheduler.age(self.processes)

        # 2. 디스패치 직전 큐 상태 기록
        self._record_queue_states()

        # 3. 가장 높은 큐에서 하나 실행 (없으면 idle)
        picked = self.scheduler.pick_next()
        if picked is None:
            self._run_idle()
        else:
            level, process = picked
            self._log_event('DISPATCHED', process, level)
            if level == QueueLevel.Q0:
                self._run_round_robin(process)
            elif level == QueueLevel.Q3:
                self._run_srtf(process)
            else:
                self._run_to_completion(process)

        # 4. Starvation 방지 승격
        for process, src, dst in self.scheduler.promote():
            self._log_event('PROMOTED', process, dst, f"{src.label} -> {dst.label}")

        self.iteration += 1

    def _handle_arrivals(self) -> int:
        """도착했지만 아직 배정되지 않은 프로세스를 Q0에 추가"""
        admitted = 0
        for process in self.processes:
            if (process.arrival_time <= self.current_time
                    and not process.completed
                    and process.current_queue == QueueLevel.UNASSIGNED):
                self.scheduler.add_process(process)
                self._log_event('ARRIVED', process, QueueLevel.Q0)
                admitted += 1
        return admitted

    def _run_round_robin(self, process: Process):
        """Q0: quantum만큼 실행, 남으면 Q1으로 강등"""
        exec_time = min(self.config.quantum, process.remaining_time)
        self._execute(process, exec_time)

        if process.remaining_time == 0:
            self._complete(process)
        else:
            self.scheduler.demote(process)
            self._log_event('DEMOTED', process, QueueLevel.Q1)

    def _run_to_completion(self, process: Process):
        """Q1/Q2: 비선점, 남은 시간 전부 실행"""
        self._execute(process, process.remaining_time)
        self._complete(process)

    def _run_srtf(self, process: Process):
        """Q3: 1 tick 실행 후 재삽입"""
        self._execute(process, 1)

        # 실행 중 도착한 프로세스는 Q3가 아니라 Q0으로
        preempt = self._handle_arrivals() > 0
        if not self.scheduler.queues.is_empty(QueueLevel.Q0) \
                or not self.scheduler.queues.is_empty(QueueLevel.Q1) \
                or not self.scheduler.queues.is_empty(QueueLevel.Q2):
            preempt = True

        if process.remaining_time == 0:
            self._complete(process)
        else:
            # 선점 여부와 관계없이 Q3에 재삽입, 다음 반복의 큐 우선순위가 선점을 처리
            self.scheduler.requeue(process)
            self._log_event('PREEMPTED' if preempt else 'REQUEUED', process, QueueLevel.Q3)

    def _run_idle(self):
        """모든 큐가 비었으면 1 tick 진행"""
        self.gantt.record(None, self.current_time, self.current_time + 1)
        self.current_time += 1
        self.history.append({
            'iteration': self.iteration,
            'time': self.current_time - 1,
            'event': 'IDLE',
            'pid': None,
            'queue': None,
            'remaining_time': None,
            'detail': '',
        })
        logger.debug("t=%d CPU idle", self.current_time - 1)

    def _execute(self, process: Process, exec_time: int):
        """exec_time 만큼 CPU 실행 + Gantt 기록"""
        # 첫 실행 시간 기록
        if process.start_time == -1:
            process.start_time = self.current_time
            process.response_time = self.current_time - process.arrival_time

        process.remaining_time -= exec_time
        self.gantt.record(process.pid, self.current_time, self.current_time + exec_time)
        self.current_time += exec_time

    def _complete(self, process: Process):
        process.completion_time = self.current_time
        process.turnaround_time = process.completion_time - process.arrival_time
        process.waiting_time = process.turnaround_time - process.burst_time
        process.completed = True
        self._log_event('COMPLETED', process, process.current_queue)

    def _log_event(self, event: str, process: Process, level: QueueLevel, detail: str = ''):
        self.history.append({
            'iteration': self.iteration,
            'time': self.current_time,
            'event': event,
            'pid': process.pid,
            'queue': level.label,
            'remaining_time': process.remaining_time,
            'detail': detail,
        })
        logger.debug("t=%d %s %s %s %s", self.current_time, process.label, event, level.label, detail)

    def _record_queue_states(self):
        """디스패치 직전 큐 상태"""
        row = {'iteration': self.iteration, 'time': self.current_time}
        for level, pids in self.scheduler.queues.snapshot().items():
            row[level.name] = pids
        self.queue_history.append(row)

    def _all_processes_done(self) -> bool:
        return all(p.completed for p in self.processes)

    def events(self) -> pd.DataFrame:
        return pd.DataFrame(self.history, columns=EVENT_COLUMNS)

    def result(self) -> SimulationResult:
        """현재까지의 결과 (run() 이후 호출)"""
        return SimulationResult(
            processes=self.processes,
            gantt=list(self.gantt.entries),
            dropped_gantt_entries=self.gantt.dropped,
            events=self.events(),
            queue_states=pd.DataFrame(self.queue_history,
                                      columns=['iteration', 'time', 'Q0', 'Q1', 'Q2', 'Q3']),
            metrics=summarize_metrics(self.processes, self.gantt.busy_ticks, self.current_time),
            final_time=self.current_time,
        )


def run_mlfq(processes: List[Process], quantum: int,
             config: Optional[MLFQConfig] = None) -> SimulationResult:
    """
    단일 호출 진입점

    Args:
        processes: 초기화된 프로세스 리스트 (제자리에서 갱신됨)
        quantum: Q0 time slice
        config: 나머지 설정 (quantum은 인자로 덮어씀)
    """
    config = replace(config or MLFQConfig(), quantum=quantum)
    sim = Simulator(processes, config)
    sim.run()
    return sim.result()
