"""
MLFQ 스케줄러 시뮬레이터 (Streamlit)

구성:
  - 단일 시뮬레이션: 워크로드/직접 입력 → Gantt 차트, 프로세스 표, 이벤트 로그
  - Quantum 벤치마크: 목표 기반 테스트로 quantum 값 비교
"""
import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from copy import deepcopy

from scheduler.config import (
    MLFQConfig, MAX_PROCESSES, MAX_GANTT_ENTRIES, STARVATION_THRESHOLD, DEFAULT_QUANTUM
)
from simulator.simulator import run_mlfq
from workload.generator import WORKLOAD_GENERATORS, generate_workload, DEFAULT_SEED
from workload.process_input import InvalidProcessInput, build_processes
from analysis.report import process_table, format_gantt_chart, format_queue_states
from benchmark.tests import TEST_CATEGORIES
from benchmark.runner import run_and_report

# 페이지 설정
st.set_page_config(
    page_title="MLFQ 스케줄러 시뮬레이터",
    page_icon="⚙️",
    layout="wide"
)

st.title("⚙️ MLFQ 스케줄러 시뮬레이터")

st.markdown("""
4단계 Multi-Level Feedback Queue 스케줄러를 tick 단위로 시뮬레이션합니다.

### 📌 큐 구성

| 큐 | 알고리즘 | 동작 |
|----|----------|------|
| **Q0** | Round Robin | quantum만큼 실행, 남으면 Q1으로 강등 |
| **Q1** | SJF | burst가 짧은 순서, 끝까지 실행 (비선점) |
| **Q2** | Priority | priority 값이 작은 순서, 끝까지 실행 (비선점) |
| **Q3** | SRTF | 남은 시간이 짧은 순서, 1 tick씩 실행 |

- 항상 Q0 → Q1 → Q2 → Q3 순서로 비어있지 않은 첫 큐를 실행합니다.
- **Starvation 방지**: 같은 큐에서 임계값(기본 5회) 이상 기다린 프로세스는 한 단계 위 큐로 승격됩니다.
- 동률은 도착 시간 → pid 순서로 결정됩니다.
""")

# 큐별 색상
QUEUE_COLORS = {
    'Q0 (Round Robin)': '#3B82F6',
    'Q1 (SJF)': '#10B981',
    'Q2 (Priority)': '#F59E0B',
    'Q3 (SRTF)': '#EF4444',
}
IDLE_COLOR = '#9CA3AF'

# ========== 설정 UI ==========

st.sidebar.header("⚙️ 시뮬레이션 설정")

input_mode = st.sidebar.radio("입력 방식", options=["워크로드 생성", "직접 입력"], index=0)

quantum = st.sidebar.number_input("Q0 quantum (ticks)", min_value=1, max_value=100,
                                  value=DEFAULT_QUANTUM, step=1)
threshold = st.sidebar.number_input("Starvation 임계값", min_value=1, max_value=100,
                                    value=STARVATION_THRESHOLD, step=1,
                                    help="큐 대기 횟수가 이 값 이상이면 한 단계 승격")
gantt_capacity = st.sidebar.number_input("Gantt 최대 항목 수", min_value=10,
                                         max_value=100000, value=MAX_GANTT_ENTRIES, step=100)

config = MLFQConfig(quantum=int(quantum), starvation_threshold=int(threshold),
                    max_processes=MAX_PROCESSES, max_gantt_entries=int(gantt_capacity))

if input_mode == "워크로드 생성":
    workload_type = st.sidebar.selectbox("워크로드", options=list(WORKLOAD_GENERATORS.keys()),
                                         index=list(WORKLOAD_GENERATORS.keys()).index("mixed"))
    process_count = st.sidebar.number_input("프로세스 수", min_value=1, max_value=config.max_processes,
                                            value=10, step=1)
    seed = st.sidebar.number_input("Seed", min_value=0, value=DEFAULT_SEED, step=1)
    manual_rows = None
else:
    st.sidebar.caption("arrival_time ≥ 0, burst_time > 0, priority 1~10")
    default_rows = pd.DataFrame({
        'arrival_time': [0, 0, 2, 5],
        'burst_time': [10, 2, 6, 3],
        'priority': [1, 3, 2, 5],
    })
    manual_rows = st.sidebar.data_editor(default_rows, num_rows="dynamic", use_container_width=True)

run_clicked = st.sidebar.button("🚀 시뮬레이션 실행", type="primary", use_container_width=True)


def build_gantt_figure(result) -> go.Figure:
    """Plotly 가로 막대 Gantt 차트"""
    events = result.events
    dispatched = events[events['event'] == 'DISPATCHED'].to_dict('records')

    fig = go.Figure()
    dispatch_index = 0
    for entry in result.gantt:
        if entry.is_idle:
            color, queue = IDLE_COLOR, 'Idle'
        else:
            # Gantt 구간과 DISPATCHED 이벤트는 같은 순서
            queue = dispatched[dispatch_index]['queue'] if dispatch_index < len(dispatched) else ''
            dispatch_index += 1
            color = QUEUE_COLORS.get(queue, IDLE_COLOR)

        fig.add_bar(
            y=[entry.label],
            x=[entry.duration],
            base=[entry.start],
            orientation='h',
            marker_color=color,
            hovertext=f"{entry} {queue}",
            showlegend=False,
        )

    fig.update_layout(
        height=max(200, 60 + 30 * len(result.processes)),
        xaxis_title="시간 (ticks)",
        yaxis=dict(autorange="reversed"),
        barmode='overlay',
        margin=dict(l=60, r=20, t=20, b=40)
    )
    return fig


if run_clicked:
    try:
        if manual_rows is not None:
            processes = build_processes(manual_rows.dropna(how='all').to_dict('records'),
                                        config.max_processes)
        else:
            processes = generate_workload(workload_type, int(process_count), seed=int(seed))
    except InvalidProcessInput as e:
        st.error(f"입력 오류: {e}")
        st.stop()

    with st.spinner("⚙️ 시뮬레이션 실행 중..."):
        result = run_mlfq(deepcopy(processes), int(quantum), config)

    st.session_state['result'] = result


# 결과 표시
if 'result' in st.session_state:
    result = st.session_state['result']
    metrics = result.metrics

    st.header("📊 결과")

    cols = st.columns(4)
    cols[0].metric("평균 대기 시간", f"{metrics['avg_waiting_time']:.2f} ticks")
    cols[1].metric("평균 반환 시간", f"{metrics['avg_turnaround_time']:.2f} ticks")
    cols[2].metric("평균 응답 시간", f"{metrics['avg_response_time']:.2f} ticks")
    cols[3].metric("CPU 이용률", f"{metrics['cpu_utilization']:.2f}%")

    st.subheader("📈 Gantt 차트")
    if result.dropped_gantt_entries:
        st.warning(f"⚠️ Gantt 용량 초과: {result.dropped_gantt_entries}개 구간은 표시되지 않습니다")
    st.plotly_chart(build_gantt_figure(result), use_container_width=True)
    st.code(format_gantt_chart(result.gantt), language=None)

    st.subheader("📋 프로세스 요약")
    st.dataframe(process_table(result.processes), use_container_width=True)

    tabs = st.tabs(["이벤트 로그", "큐 상태"])
    with tabs[0]:
        st.dataframe(result.events, use_container_width=True)
    with tabs[1]:
        iteration = st.slider("반복", min_value=0,
                              max_value=max(0, len(result.queue_states) - 1), value=0)
        if not result.queue_states.empty:
            st.code(format_queue_states(result.queue_states.iloc[iteration].to_dict()), language=None)

# ========== Quantum 벤치마크 ==========

st.markdown("---")
st.header("🧪 Quantum 벤치마크")

category = st.selectbox("테스트 카테고리", options=list(TEST_CATEGORIES.keys()), index=0)
category_info = TEST_CATEGORIES[category]
st.info(f"**{category}**\n\n{category_info['description']}")

tests_in_category = category_info['tests']
test_names = [t.name for t in tests_in_category]
selected_test = tests_in_category[test_names.index(st.selectbox("테스트 선택", options=test_names))]

st.markdown(f"**목표:** {selected_test.goal}")
st.markdown(f"**워크로드:** {selected_test.workload_type} × {selected_test.process_count} 프로세스, "
            f"{selected_test.repeats}회 반복")
st.markdown(f"**비교 quantum:** {', '.join(str(q) for q in selected_test.quantums)}")
st.markdown(f"**주요 메트릭:** {selected_test.primary_metric}")

if st.button("🚀 벤치마크 실행"):
    progress_bar = st.progress(0)
    report = run_and_report(selected_test, progress=lambda f: progress_bar.progress(int(f * 100)))
    progress_bar.empty()

    st.subheader(f"🏆 승자: quantum={report['winner']}")
    for insight in report['insights']:
        st.info(insight)

    rows = []
    for q, stats_by_metric in report['statistics'].items():
        s = stats_by_metric[selected_test.primary_metric]
        rows.append({'quantum': q, 'mean': s['mean'], 'std': s['std'],
                     'ci_lower': s['ci_lower'], 'ci_upper': s['ci_upper']})
    stats_df = pd.DataFrame(rows)
    st.dataframe(stats_df, use_container_width=True)

    fig = go.Figure()
    fig.add_bar(
        x=[str(q) for q in stats_df['quantum']],
        y=stats_df['mean'],
        error_y=dict(type='data', symmetric=False,
                     array=stats_df['ci_upper'] - stats_df['mean'],
                     arrayminus=stats_df['mean'] - stats_df['ci_lower']),
    )
    fig.update_layout(
        height=320,
        xaxis_title="quantum",
        yaxis_title=selected_test.primary_metric,
        margin=dict(l=60, r=20, t=20, b=40)
    )
    st.plotly_chart(fig, use_container_width=True)

st.markdown("---")
