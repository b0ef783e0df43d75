"""
콘솔 리포트 (큐 상태, Gantt 차트, 프로세스 요약 표)

출력 형식은 원래 콘솔 프로그램과 같다:
  - Gantt: | P1(0-2) | Idle(2-3) |
  - 평균값은 소수점 2자리, CPU 이용률은 %
"""
from typing import Dict, Iterable, List
import pandas as pd
from scheduler.process import Process, QueueLevel, GanttEntry

SUMMARY_COLUMNS = ['PID', 'Arrival', 'Burst', 'Priority',
                   'Completion', 'Waiting', 'Turnaround', 'Response']


def queue_name(level) -> str:
    return QueueLevel(level).label


def format_queue_states(row: Dict) -> str:
    """queue_states 한 행 → 여러 줄 문자열"""
    lines = ["Queue States:"]
    for level in (QueueLevel.Q0, QueueLevel.Q1, QueueLevel.Q2, QueueLevel.Q3):
        pids = row.get(level.name) or []
        contents = " ".join(f"P{pid}" for pid in pids) if pids else "Empty"
        lines.append(f"  {level.label}: {contents}")
    return "\n".join(lines)


def format_gantt_chart(entries: Iterable[GanttEntry]) -> str:
    return "| " + "".join(f"{entry} | " for entry in entries)


def process_table(processes: List[Process]) -> pd.DataFrame:
    """프로세스별 요약 표"""
    rows = [
        [p.pid, p.arrival_time, p.burst_time, p.priority,
         p.completion_time, p.waiting_time, p.turnaround_time, p.response_time]
        for p in processes
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def format_averages(metrics: Dict[str, float]) -> str:
    return "\n".join([
        f"Average Waiting Time: {metrics['avg_waiting_time']:.2f} units",
        f"Average Turnaround Time: {metrics['avg_turnaround_time']:.2f} units",
        f"Average Response Time: {metrics['avg_response_time']:.2f} units",
        f"CPU Utilization: {metrics['cpu_utilization']:.2f}%",
    ])


def format_event(event: Dict) -> str:
    """이벤트 로그 한 행 → 콘솔 문장"""
    kind = event['event']
    if kind == 'IDLE':
        return "  CPU idle"

    name = f"P{int(event['pid'])}"
    if kind == 'ARRIVED':
        return f"  {name} arrived and assigned to {event['queue']}"
    if kind == 'DISPATCHED':
        return f"  Executing {name} from {event['queue']}"
    if kind == 'COMPLETED':
        return f"  {name} completed"
    if kind == 'DEMOTED':
        return f"  {name} demoted to {event['queue']} (remaining time: {int(event['remaining_time'])})"
    if kind == 'PREEMPTED':
        return f"  {name} preempted and reinserted into {event['queue']} (remaining time: {int(event['remaining_time'])})"
    if kind == 'REQUEUED':
        return f"  {name} reinserted into {event['queue']} (remaining time: {int(event['remaining_time'])})"
    if kind == 'PROMOTED':
        src, dst = event['detail'].split(' -> ')
        return f"  {name} promoted from {src} to {dst}"
    return f"  {name} {kind}"


def format_summary(result) -> str:
    """Gantt 차트 + 프로세스 표 + 평균값"""
    parts = ["Gantt Chart:", format_gantt_chart(result.gantt)]
    if result.dropped_gantt_entries:
        parts.append(f"({result.dropped_gantt_entries} intervals not shown)")
    parts.append("")
    parts.append("Process Details:")
    parts.append(process_table(result.processes).to_string(index=False))
    parts.append("")
    parts.append(format_averages(result.metrics))
    return "\n".join(parts)
