#!/usr/bin/env python3
"""메트릭 집계 / 콘솔 리포트 테스트"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest
from scheduler.process import Process, QueueLevel, GanttEntry
from scheduler.config import MLFQConfig
from simulator.simulator import run_mlfq
from analysis.metrics import (
    calculate_avg_wait_time, calculate_avg_turnaround, calculate_avg_response,
    calculate_busy_ticks, calculate_cpu_utilization, calculate_throughput, summarize_metrics
)
import run_mlfq_cli
from analysis.report import (
    queue_name, format_queue_states, format_gantt_chart, process_table,
    format_averages, format_event, format_summary, SUMMARY_COLUMNS
)


def finished(pid, arrival, burst, completion, start):
    p = Process(pid=pid, arrival_time=arrival, burst_time=burst)
    p.remaining_time = 0
    p.completed = True
    p.start_time = start
    p.completion_time = completion
    p.turnaround_time = completion - arrival
    p.waiting_time = p.turnaround_time - burst
    p.response_time = start - arrival
    return p


def two_process_result():
    return run_mlfq([
        Process(pid=1, arrival_time=0, burst_time=10, priority=1),
        Process(pid=2, arrival_time=0, burst_time=2, priority=1),
    ], quantum=2)


def test_averages():
    processes = [finished(1, 0, 4, 4, 0), finished(2, 1, 2, 8, 4)]

    assert calculate_avg_wait_time(processes) == pytest.approx(2.5)
    assert calculate_avg_turnaround(processes) == pytest.approx(5.5)
    assert calculate_avg_response(processes) == pytest.approx(1.5)
    assert calculate_throughput(processes) == pytest.approx(2 / 8)


def test_cpu_utilization_bounds():
    assert calculate_cpu_utilization(0, 0) == 0.0
    assert calculate_cpu_utilization(0, 5) == 0.0
    assert calculate_cpu_utilization(5, 5) == 100.0
    assert calculate_cpu_utilization(3, 4) == 75.0


def test_busy_ticks_ignores_idle():
    entries = [GanttEntry(1, 0, 3), GanttEntry(None, 3, 4), GanttEntry(2, 4, 6)]

    assert calculate_busy_ticks(entries) == 5


def test_summarize_metrics_keys():
    metrics = summarize_metrics([finished(1, 0, 3, 3, 0)], busy_ticks=3, elapsed_ticks=3)

    assert metrics['cpu_utilization'] == 100.0
    assert metrics['avg_waiting_time'] == 0.0
    assert metrics['elapsed_ticks'] == 3
    assert set(metrics) >= {'avg_waiting_time', 'avg_turnaround_time',
                            'avg_response_time', 'cpu_utilization'}


def test_queue_names():
    assert queue_name(0) == "Q0 (Round Robin)"
    assert queue_name(QueueLevel.Q3) == "Q3 (SRTF)"
    assert queue_name(-1) == "Unassigned"


def test_format_gantt_chart():
    result = two_process_result()

    assert format_gantt_chart(result.gantt) == "| P1(0-2) | P2(2-4) | P1(4-12) | "
    assert format_gantt_chart([GanttEntry(None, 2, 3)]) == "| Idle(2-3) | "


def test_format_queue_states():
    text = format_queue_states({'Q0': [1, 2], 'Q1': [], 'Q2': [], 'Q3': [3]})

    assert text.splitlines() == [
        "Queue States:",
        "  Q0 (Round Robin): P1 P2",
        "  Q1 (SJF): Empty",
        "  Q2 (Priority): Empty",
        "  Q3 (SRTF): P3",
    ]


def test_process_table():
    result = two_process_result()
    table = process_table(result.processes)

    assert list(table.columns) == SUMMARY_COLUMNS
    assert table['Completion'].tolist() == [12, 4]
    assert table['Waiting'].tolist() == [2, 2]
    assert table['Response'].tolist() == [0, 2]


def test_format_averages():
    result = two_process_result()

    assert format_averages(result.metrics).splitlines() == [
        "Average Waiting Time: 2.00 units",
        "Average Turnaround Time: 8.00 units",
        "Average Response Time: 1.00 units",
        "CPU Utilization: 100.00%",
    ]


def test_format_event_messages():
    result = two_process_result()
    messages = [format_event(e) for e in result.events.to_dict('records')]

    assert messages[:5] == [
        "  P1 arrived and assigned to Q0 (Round Robin)",
        "  P2 arrived and assigned to Q0 (Round Robin)",
        "  Executing P1 from Q0 (Round Robin)",
        "  P1 demoted to Q1 (SJF) (remaining time: 8)",
        "  Executing P2 from Q0 (Round Robin)",
    ]
    assert messages[-1] == "  P1 completed"

    promoted = {'event': 'PROMOTED', 'pid': 4, 'queue': 'Q2 (Priority)',
                'remaining_time': 7, 'detail': 'Q3 (SRTF) -> Q2 (Priority)'}
    assert format_event(promoted) == "  P4 promoted from Q3 (SRTF) to Q2 (Priority)"
    assert format_event({'event': 'IDLE'}) == "  CPU idle"


def test_format_summary_mentions_dropped_intervals():
    processes = [
        Process(pid=1, arrival_time=0, burst_time=2),
        Process(pid=2, arrival_time=5, burst_time=1),
    ]
    result = run_mlfq(processes, quantum=4, config=MLFQConfig(max_gantt_entries=1))

    text = format_summary(result)

    assert "| P1(0-2) | " in text
    assert "(4 intervals not shown)" in text
    assert "CPU Utilization: 50.00%" in text


def test_cli_generated_workload(capsys):
    assert run_mlfq_cli.main(["--workload", "staggered", "-n", "4", "-q", "2"]) == 0

    out = capsys.readouterr().out
    assert "Starting MLFQ Scheduler..." in out
    assert "Time 0:" in out
    assert "Queue States:" in out
    assert "Gantt Chart:" in out
    assert "CPU Utilization:" in out


def test_cli_rejects_invalid_quantum(capsys):
    assert run_mlfq_cli.main(["--workload", "mixed", "-q", "0", "--quiet"]) == 2
    assert "Quantum must be positive" in capsys.readouterr().err


def test_cli_respects_max_processes(capsys):
    assert run_mlfq_cli.main(["--workload", "mixed", "-n", "3", "--max-processes", "2",
                              "--quiet"]) == 2
    assert "Process count must be between 1 and 2" in capsys.readouterr().err


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
