from __future__ import annotations

import matplotlib.pyplot as plt

from .results import TotalResult

SOURCE_COLORS = {
    "enteric": "#2E7D32",
    "manure": "#8D6E63",
    "soil": "#F9A825",
    "energy": "#1565C0",
    "inputs": "#6A1B9A",
}


def plot_breakdown(total: TotalResult, kind: str = "bar", ax: plt.Axes | None = None) -> plt.Axes:
    """Bar or pie chart of emissions by source."""
    if kind not in {"bar", "pie"}:
        raise ValueError("kind must be 'bar' or 'pie'")
    if ax is None:
        _, ax = plt.subplots(figsize=(7, 4))

    sources = [source for source, _value, _unit in total.by_source]
    values = [value for _source, value, _unit in total.by_source]
    colors = [SOURCE_COLORS.get(source, "#9E9E9E") for source in sources]

    if kind == "bar":
        ax.bar(sources, [value / 1000.0 for value in values], color=colors)
        ax.set_ylabel("t CO2eq / year")
        ax.grid(axis="y", linestyle=":", alpha=0.6)
    else:
        positive = [(s, v, c) for s, v, c in zip(sources, values, colors) if v > 0]
        if positive:
            labels, sizes, pie_colors = zip(*positive)
            ax.pie(sizes, labels=labels, colors=pie_colors, autopct="%1.1f%%", startangle=90)
        ax.set_aspect("equal")
    ax.set_title(f"Emissions by source (total {total.total_co2eq / 1000.0:,.1f} t CO2eq)")
    return ax
