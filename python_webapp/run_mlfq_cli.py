#!/usr/bin/env python3
"""
MLFQ 스케줄러 콘솔 실행

사용법:
  python run_mlfq_cli.py                          # 대화형 입력
  python run_mlfq_cli.py --workload mixed -n 10 -q 4
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import argparse
import logging
from scheduler.config import (
    MLFQConfig, MAX_PROCESSES, STARVATION_THRESHOLD, MAX_GANTT_ENTRIES, DEFAULT_QUANTUM
)
from simulator.simulator import run_mlfq
from workload.generator import WORKLOAD_GENERATORS, generate_workload, DEFAULT_SEED
from workload.process_input import (
    InvalidProcessInput, prompt_processes, validate_process_count, validate_quantum
)
from analysis.report import format_event, format_queue_states, format_summary


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Multi-Level Feedback Queue scheduler simulator')
    parser.add_argument('--workload', '-w', choices=sorted(WORKLOAD_GENERATORS),
                        help='generate a workload instead of prompting')
    parser.add_argument('--count', '-n', type=int, default=10,
                        help='number of generated processes')
    parser.add_argument('--quantum', '-q', type=int, default=None,
                        help='Q0 (Round Robin) time slice')
    parser.add_argument('--seed', '-s', type=int, default=DEFAULT_SEED)
    parser.add_argument('--threshold', '-t', type=int, default=STARVATION_THRESHOLD,
                        help='starvation threshold for promotion')
    parser.add_argument('--gantt-capacity', type=int, default=MAX_GANTT_ENTRIES)
    parser.add_argument('--max-processes', type=int, default=MAX_PROCESSES,
                        help='upper bound on the number of processes')
    parser.add_argument('--quiet', action='store_true',
                        help='skip the per-iteration trace')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='enable debug logging')
    return parser.parse_args(argv)


def print_trace(result):
    """반복별 도착 → 큐 상태 → 실행/강등/승격 출력"""
    events_by_iteration = {}
    for event in result.events.to_dict('records'):
        events_by_iteration.setdefault(event['iteration'], []).append(event)

    for state in result.queue_states.to_dict('records'):
        print(f"\nTime {state['time']}:")
        events = events_by_iteration.get(state['iteration'], [])
        # 디스패치 이전의 ARRIVED만 큐 상태보다 먼저 출력
        split = next((i for i, e in enumerate(events) if e['event'] in ('DISPATCHED', 'IDLE')),
                     len(events))
        for event in events[:split]:
            print(format_event(event))
        print(format_queue_states(state))
        for event in events[split:]:
            print(format_event(event))


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(format='%(levelname)s: %(message)s',
                        level=logging.DEBUG if args.verbose else logging.WARNING)

    config = MLFQConfig(starvation_threshold=args.threshold,
                        max_processes=args.max_processes,
                        max_gantt_entries=args.gantt_capacity)

    try:
        if args.workload:
            validate_process_count(args.count, config.max_processes)
            processes = generate_workload(args.workload, args.count, seed=args.seed)
            quantum = validate_quantum(args.quantum if args.quantum is not None else DEFAULT_QUANTUM)
        else:
            processes, quantum = prompt_processes(max_processes=config.max_processes,
                                                  quantum=args.quantum)
            validate_quantum(quantum)
    except InvalidProcessInput as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    print("\nStarting MLFQ Scheduler...")
    result = run_mlfq(processes, quantum, config)

    if not args.quiet:
        print_trace(result)

    print()
    print(format_summary(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
