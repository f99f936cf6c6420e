"""
Memory Allocation Visualizer — First Fit, Best Fit & Worst Fit

This application provides an interactive simulation and visualization of
contiguous dynamic memory allocation including:
    - Placement algorithms (First Fit, Best Fit, Worst Fit)
    - Block splitting on allocation
    - Coalescing of adjacent free blocks on deallocation
    - Utilization and external fragmentation metrics

Built with Streamlit for the web interface and Plotly for visualizations.
The allocation logic lives in engine.py and placement.py; this file only
drives the engine and renders its snapshots.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

import config
from engine import MemoryManager
from exceptions import AllocatorError
from placement import Policy, algorithm_info
from utils import block_label, get_color


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

settings = config.SimulatorConfig()
unit = settings.unit

st.set_page_config(page_title="Memory Allocation Visualizer", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Memory Allocation Visualizer — First Fit, Best Fit & Worst Fit")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Operating System Concepts Used in This Project")
    st.markdown(
        """
        ### **1. Contiguous Allocation**
        - Each process receives one contiguous block of memory.
        - Memory is tracked as an ordered list of free and allocated blocks.

        ### **2. Splitting**
        - When a free block is larger than the request, it is split into an
          allocated block and a smaller free remainder.

        ### **3. Coalescing**
        - When a process is freed, its block is merged with neighbouring free
          blocks so two free blocks are never adjacent.

        ### **4. External Fragmentation**
        - Total free memory may be large, yet no single block is big enough.
        - Here, free blocks below the fragment threshold count as fragmented.
        """
    )
    for policy in Policy:
        info = algorithm_info(policy)
        st.subheader(policy.value)
        st.write(info.description)
        st.markdown(
            f"- **Time:** {info.time_complexity}, **Space:** {info.space_complexity}\n"
            + "".join(f"- ✔ {a}\n" for a in info.advantages)
            + "".join(f"- ✘ {d}\n" for d in info.disadvantages)
            + f"- **Best use case:** {info.best_use_case}"
        )
    st.stop()  # Stop rendering - don't show simulator on Concepts page

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

total_size = st.sidebar.number_input(
    f"Total memory ({unit})",
    min_value=config.MIN_TOTAL_SIZE,
    max_value=config.MAX_TOTAL_SIZE,
    value=settings.total_size,
    step=50,
)

fragment_threshold = st.sidebar.number_input(
    f"Fragment threshold ({unit})",
    min_value=0,
    value=settings.fragment_threshold,
    step=10,
)

policies = list(Policy)
policy = st.sidebar.selectbox(
    "Allocation Algorithm",
    options=policies,
    index=policies.index(Policy.parse(settings.default_policy)),
    format_func=lambda p: p.value,
)
st.sidebar.info(algorithm_info(policy).description)

# -----------------------------------------------------------------------------
# SESSION STATE - Memory Manager Persistence
# -----------------------------------------------------------------------------

# A new total size means a new address space; the threshold only affects metrics
if 'manager' not in st.session_state or st.session_state.manager.total_size != total_size:
    st.session_state.manager = MemoryManager(int(total_size), int(fragment_threshold))

manager: MemoryManager = st.session_state.manager
manager.fragment_threshold = int(fragment_threshold)

if st.sidebar.button("Reset Memory"):
    manager.reset()
    st.sidebar.success("Memory has been reset to initial state")

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Allocation Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Allocate Memory")
    with st.form("allocate"):
        pid = st.number_input("Process ID", min_value=1, value=1, step=1)
        size = st.number_input(f"Memory Size ({unit})", min_value=1, value=100, step=10)
        submitted = st.form_submit_button(f"Allocate Using {policy.value}")
    if submitted:
        try:
            if manager.allocate(int(pid), int(size), policy):
                st.success(f"Allocated {size}{unit} to Process {pid} using {policy.value}")
            else:
                st.error(f"Failed to allocate {size}{unit} to Process {pid}. "
                         "Not enough contiguous memory available.")
        except AllocatorError as e:
            st.error(str(e))

    st.subheader("Deallocate Memory")
    with st.form("deallocate"):
        free_pid = st.number_input("Process ID to Deallocate", min_value=1, value=1, step=1)
        freed = st.form_submit_button("Deallocate Process")
    if freed:
        if manager.deallocate(int(free_pid)):
            st.success(f"Deallocated memory for Process {free_pid}")
        else:
            st.error(f"Process {free_pid} not found or already deallocated.")

    # Most recent events first
    st.subheader("Event Log")
    for ev in manager.event_log[-config.EVENT_LOG_LIMIT:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    # ----- Memory Map -----
    st.subheader("Memory Map")
    blocks = manager.blocks()

    # One horizontal segment per block, widths proportional to block size
    fig = go.Figure()
    for b in blocks:
        label = block_label(b, manager.fragment_threshold, unit)
        fig.add_trace(go.Bar(
            x=[b.size],
            y=["Memory"],
            base=[b.start],
            orientation='h',
            marker_color=get_color(b, manager.fragment_threshold),
            marker_line=dict(color="black", width=1),
            text=label,
            hovertext=f"{label} @ {b.start}-{b.end}",
            hoverinfo='text',
        ))
    fig.update_layout(
        height=180,
        showlegend=False,
        barmode='overlay',
        xaxis=dict(range=[0, manager.total_size], title=f"Address ({unit})"),
        yaxis=dict(showticklabels=False),
    )
    st.plotly_chart(fig, use_container_width=True)

    # ----- Statistics Display -----
    st.subheader("Statistics")
    stats = manager.stats()

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total Memory", f"{stats.total_size}{unit}")
    m2.metric("Free Memory", f"{stats.free_total}{unit}")
    m3.metric("Allocated", f"{stats.allocated_total}{unit}")
    m4.metric("Processes", stats.active_process_count)

    st.write(f"Memory Utilization: {stats.utilization_pct:.1f}%")
    st.progress(min(stats.utilization_pct / 100, 1.0))
    st.write(f"Fragmentation Level: {stats.fragmentation_pct:.1f}%")
    st.progress(min(stats.fragmentation_pct / 100, 1.0))

    report = manager.fragmentation_report()
    st.table([{
        "free_blocks": stats.free_block_count,
        "allocated_blocks": stats.allocated_block_count,
        "fragmented_blocks": stats.fragmented_block_count,
        f"largest_free_{unit}": report.largest_free_block,
        f"avg_free_{unit}": report.average_free_block_size,
    }])

    # ----- Active Processes -----
    st.subheader("Active Processes")
    processes = manager.active_processes()
    if len(processes) == 0:
        st.write("No processes allocated")
    else:
        st.table([{"process": f"P{p}", f"size_{unit}": s} for p, s in processes])

# =============================================================================
# FOOTER - Usage Tips
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Allocate a few processes, free the ones in the middle, then compare how each algorithm reuses the holes.\n"
    "- Lower the fragment threshold to see which free blocks count as fragmented.\n"
    "- Changing total memory starts a new address space."
)
