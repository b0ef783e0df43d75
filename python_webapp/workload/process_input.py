"""
프로세스 입력 수집 / 검증

시뮬레이터는 프로세스 수 상한만 다시 확인하므로 나머지는 여기서 확인한다:
  - 프로세스 수: 1 ~ max_processes
  - quantum > 0
  - arrival >= 0, burst > 0, priority 1~10 (모두 정수, 2.7 같은 값은 거부)
"""
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union
from scheduler.process import Process
from scheduler.config import MAX_PROCESSES, PRIORITY_MIN, PRIORITY_MAX

ProcessRow = Union[Sequence[int], Dict[str, int]]


class InvalidProcessInput(ValueError):
    """잘못된 프로세스/설정 입력"""


def validate_process_count(count: int, max_processes: int = MAX_PROCESSES) -> int:
    if count <= 0 or count > max_processes:
        raise InvalidProcessInput(f"Process count must be between 1 and {max_processes}, got {count}")
    return count


def validate_quantum(quantum: int) -> int:
    if quantum <= 0:
        raise InvalidProcessInput(f"Quantum must be positive, got {quantum}")
    return quantum


def validate_arrival_time(arrival_time: int) -> int:
    if arrival_time < 0:
        raise InvalidProcessInput(f"Arrival time cannot be negative, got {arrival_time}")
    return arrival_time


def validate_burst_time(burst_time: int) -> int:
    if burst_time <= 0:
        raise InvalidProcessInput(f"Burst time must be positive, got {burst_time}")
    return burst_time


def validate_priority(priority: int) -> int:
    if priority < PRIORITY_MIN or priority > PRIORITY_MAX:
        raise InvalidProcessInput(
            f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}, got {priority}")
    return priority


def validate_process_fields(arrival_time: int, burst_time: int, priority: int):
    validate_arrival_time(arrival_time)
    validate_burst_time(burst_time)
    validate_priority(priority)


def validate_processes(processes: List[Process], max_processes: int = MAX_PROCESSES):
    """이미 만들어진 프로세스 리스트 검증 (pid는 1부터 연속)"""
    validate_process_count(len(processes), max_processes)
    for index, p in enumerate(processes):
        if p.pid != index + 1:
            raise InvalidProcessInput(f"Expected pid {index + 1} at position {index}, got {p.pid}")
        validate_process_fields(p.arrival_time, p.burst_time, p.priority)


def _as_int(value, name: str) -> int:
    """정수로 표현되는 값만 허용 (2.0은 통과, 2.7이나 NaN은 거부)"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidProcessInput(f"{name} must be an integer, got {value!r}") from None
    if not number.is_integer():
        raise InvalidProcessInput(f"{name} must be an integer, got {value!r}")
    return int(number)


def build_processes(rows: Iterable[ProcessRow], max_processes: int = MAX_PROCESSES) -> List[Process]:
    """
    (arrival, burst, priority) 행 → 프로세스 리스트

    Args:
        rows: 튜플 또는 {'arrival_time', 'burst_time', 'priority'} dict
              (priority 생략 시 1)
    """
    processes = []
    for index, row in enumerate(rows):
        if isinstance(row, dict):
            arrival = _as_int(row['arrival_time'], 'Arrival time')
            burst = _as_int(row['burst_time'], 'Burst time')
            priority = _as_int(row.get('priority', PRIORITY_MIN), 'Priority')
        else:
            arrival = _as_int(row[0], 'Arrival time')
            burst = _as_int(row[1], 'Burst time')
            priority = _as_int(row[2], 'Priority') if len(row) > 2 else PRIORITY_MIN
        validate_process_fields(arrival, burst, priority)
        processes.append(Process(pid=index + 1, arrival_time=arrival,
                                 burst_time=burst, priority=priority))

    validate_process_count(len(processes), max_processes)
    return processes


def _ask_int(prompt: str, validator: Callable[[int], int],
             input_fn: Callable[[str], str], print_fn: Callable[..., None]) -> int:
    """유효한 값이 나올 때까지 다시 묻기"""
    while True:
        raw = input_fn(prompt)
        try:
            return validator(int(raw))
        except ValueError as e:
            # int() 실패도 ValueError
            message = str(e) if isinstance(e, InvalidProcessInput) else f"Not an integer: {raw!r}"
            print_fn(f"{message}. Enter again.")


def prompt_processes(input_fn: Callable[[str], str] = input,
                     print_fn: Callable[..., None] = print,
                     max_processes: int = MAX_PROCESSES,
                     quantum: Optional[int] = None):
    """
    대화형 입력

    Returns:
        (프로세스 리스트, quantum)
    """
    count = _ask_int(f"Enter the number of processes (max {max_processes}): ",
                     lambda n: validate_process_count(n, max_processes), input_fn, print_fn)
    if quantum is None:
        quantum = _ask_int("Enter the quantum time for Q0 (Round Robin): ",
                           validate_quantum, input_fn, print_fn)

    processes = []
    for pid in range(1, count + 1):
        print_fn(f"\nProcess {pid}:")
        arrival = _ask_int("Enter Arrival Time: ", validate_arrival_time, input_fn, print_fn)
        burst = _ask_int("Enter Burst Time: ", validate_burst_time, input_fn, print_fn)
        priority = _ask_int("Enter Priority (1-10, lower is higher priority): ",
                            validate_priority, input_fn, print_fn)
        processes.append(Process(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority))

    return processes, quantum
