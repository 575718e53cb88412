# recipe_planner/reports/convergence_chart.py
"""
Convergence chart for a planning run.

Plots the running best fitness per generation for every planned day
on one matplotlib figure, so early stagnation stops and slow
convergence are easy to spot.
"""
import logging
from pathlib import Path
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")  # Headless backend
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from recipe_planner.generators.genetic import DayRunSummary

logger = logging.getLogger(__name__)


def history_frame(summaries: List[DayRunSummary]) -> pd.DataFrame:
    """
    Best-fitness history as a generation x day DataFrame.

    Days that stopped early have NaN for the generations they did
    not run.
    """
    columns = {str(s.day): pd.Series(s.history, dtype=float) for s in summaries}
    df = pd.DataFrame(columns)
    df.index.name = "generation"
    return df


class ConvergenceChartBuilder:
    """Builds the best-fitness-per-generation chart."""

    def __init__(self, output_file: Path = Path("meal_plan_convergence.jpg")):
        """
        Args:
            output_file: Output image path (format from suffix)
        """
        self.output_file = Path(output_file)

    def build(self, summaries: List[DayRunSummary], title: Optional[str] = None) -> Optional[Path]:
        """
        Render the chart.

        Args:
            summaries: Per-day run summaries (planner.last_run)
            title: Chart title (optional)

        Returns:
            Path written, or None if there was nothing to plot
        """
        df = history_frame(summaries)
        if df.empty:
            logger.info("No convergence history to chart")
            return None

        fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)

        generations = df.index.values
        for day in df.columns:
            values = df[day].values.astype(float)
            valid = ~np.isnan(values)
            ax.plot(generations[valid], values[valid], linewidth=1.5, label=day)

            # Mark where the day stopped
            last = np.where(valid)[0][-1]
            ax.plot(generations[last], values[last], marker="x", color="black", markersize=6)

        ax.set_xlabel("Generation")
        ax.set_ylabel("Best fitness (lower is better)")
        ax.grid(True, alpha=0.25)
        if len(df.columns) <= 14:
            ax.legend(loc="upper right", frameon=False)

        fig.suptitle(title or "Best fitness per generation", fontsize=14)

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(self.output_file, dpi=150)
        plt.close(fig)

        logger.info("Convergence chart saved to %s", self.output_file)
        return self.output_file
