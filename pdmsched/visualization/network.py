import logging

import networkx as nx
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.patches import Patch

logger = logging.getLogger(__name__)


def _layered_layout(G, scheduler):
    """Place each task at x = early start, spreading tasks that share a column."""
    pos = {}
    columns = {}
    for task_id in scheduler.schedule_order:
        x = G.nodes[task_id]["early_start"]
        row = columns.get(x, 0)
        columns[x] = row + 1
        pos[task_id] = (x, -row)
    return pos


def create_network_diagram(scheduler, filename=None, show=True, layout="schedule"):
    """
    Visualize the task dependency network with the critical path highlighted.

    Args:
        scheduler: A PDMScheduler on which schedule() has been called
        filename: Optional filename to save the diagram
        show: Whether to display the diagram (default: True)
        layout: Network layout type ('schedule', 'spring', 'dot', 'circular',
            'shell' or 'spectral')

    Returns:
        The matplotlib figure
    """
    G = scheduler.get_task_graph()
    critical_path = scheduler.critical_path

    # Create the figure
    fig = plt.figure(figsize=(12, 8))

    # Prepare node attributes
    node_colors = []
    for node in G.nodes():
        if G.nodes[node]["is_anchor"]:
            node_colors.append("lightgray")
        elif node in critical_path:
            node_colors.append("red")
        else:
            node_colors.append("skyblue")

    # Prepare edge attributes
    edge_colors = []
    edge_widths = []
    for u, v in G.edges():
        # Edge is critical when both ends are critical and v starts as u finishes
        is_critical_edge = (
            u in critical_path
            and v in critical_path
            and G.nodes[u]["early_finish"] == G.nodes[v]["early_start"]
        )
        if is_critical_edge:
            edge_colors.append("red")
            edge_widths.append(2.5)
        else:
            edge_colors.append("gray")
            edge_widths.append(1.0)

    # Choose layout algorithm
    if layout == "schedule":
        pos = _layered_layout(G, scheduler)
    elif layout == "spring":
        pos = nx.spring_layout(G, seed=42)
    elif layout == "dot":
        try:
            pos = nx.nx_agraph.graphviz_layout(G, prog="dot")
        except ImportError:
            logger.warning("Graphviz not available. Using spring layout instead.")
            pos = nx.spring_layout(G, seed=42)
    elif layout == "circular":
        pos = nx.circular_layout(G)
    elif layout == "shell":
        pos = nx.shell_layout(G)
    elif layout == "spectral":
        pos = nx.spectral_layout(G)
    else:
        pos = _layered_layout(G, scheduler)

    nx.draw_networkx_nodes(
        G,
        pos,
        node_color=node_colors,
        node_size=900,
        node_shape="o",
        edgecolors="black",
    )

    nx.draw_networkx_edges(
        G,
        pos,
        edge_color=edge_colors,
        width=edge_widths,
        arrowsize=15,
        arrowstyle="-|>",
        connectionstyle="arc3,rad=0.1",
        node_size=900,
    )

    # Label each task with its ID and ES/EF over LS/LF
    labels = {}
    for node in G.nodes():
        data = G.nodes[node]
        labels[node] = (
            f"{node}\n{data['early_start']}|{data['early_finish']}\n"
            f"{data['late_start']}|{data['late_finish']}"
        )
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=7)

    # Create legend
    legend_elements = [
        Patch(facecolor="red", edgecolor="black", label="Critical Task"),
        Patch(facecolor="skyblue", edgecolor="black", label="Task With Slack"),
        Patch(facecolor="lightgray", edgecolor="black", label="START / END"),
        Line2D([0], [0], color="red", lw=2.5, label="Critical Path"),
    ]
    plt.legend(handles=legend_elements, loc="best", fontsize=10)

    # Set title and remove axis
    plt.title(
        f"Project Network Diagram (duration {scheduler.project_duration})",
        fontsize=14,
    )
    plt.axis("off")
    plt.tight_layout()

    # Save if filename provided
    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")
        logger.info("Network diagram saved to %s", filename)

    # Show if requested
    if show:
        plt.show()

    return fig
