from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt

from .problem import ValveProblem


def plot_release_timeline(problem: ValveProblem, plans: Sequence[Sequence[str]], save_path: Optional[str] = None, labels: Optional[Sequence[str]] = None):
    """
    Plot cumulative released value per minute for one or more activation orders.

    Args:
        problem: The problem the plans were made for.
        plans: One activation order per agent.
        save_path: Path to save the plot image (optional).
        labels: Legend label per plan (defaults to "Agent 1", "Agent 2", ...).

    Returns:
        The matplotlib Figure.
    """
    fig = plt.figure(figsize=(12, 6))
    minutes = list(range(problem.budget + 1))
    total = [0] * len(minutes)

    for index, order in enumerate(plans):
        rate = [0] * len(minutes)
        for activation in problem.schedule(order):
            flow = problem.graph[activation.valve].flow_rate
            for minute in range(activation.minute + 1, len(minutes)):
                rate[minute] += flow
        released = []
        running = 0
        for minute in minutes:
            running += rate[minute]
            released.append(running)
            total[minute] += running
        label = labels[index] if labels else f"Agent {index + 1}"
        plt.step(minutes, released, where="post", label=label, alpha=0.7)

    if len(plans) > 1:
        plt.step(minutes, total, where="post", label="Combined", color="red")

    plt.title(f'Released value over {problem.budget} minutes - Total: {total[-1]}')
    plt.xlabel('Minute')
    plt.ylabel('Cumulative released value')
    plt.grid(True)
    plt.legend()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Timeline plot saved to '{save_path}'")
    return fig
