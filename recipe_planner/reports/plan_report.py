# recipe_planner/reports/plan_report.py
"""
Report builder for planned meals.

Builds a per-day table of the planned recipe, its nutrient totals and
cost, and renders it (plus run and shopping-list summaries) to the
terminal with rich.
"""
from typing import List, Optional

import pandas as pd
from rich.console import Console
from rich.table import Table

from recipe_planner.generators.ga_scoring import FitnessEvaluator
from recipe_planner.generators.genetic import DayRunSummary
from recipe_planner.models import MealPlan, NUTRIENT_FIELDS
from recipe_planner.shopping import ShoppingList


class PlanReport:
    """
    Tabular view of a list of planned meals.

    Nutrient totals and cost come from the same FitnessEvaluator the
    search used, so the report matches what was optimized.
    """

    def __init__(self, evaluator: FitnessEvaluator, console: Optional[Console] = None):
        """
        Args:
            evaluator: Evaluator built for the run's parameters
            console: rich Console (a default one if omitted)
        """
        self.evaluator = evaluator
        self.console = console or Console()

    def build_frame(self, plans: List[MealPlan]) -> pd.DataFrame:
        """
        One row per planned meal.

        Columns: date, recipe, servings, <nutrients...>, cost, fitness
        """
        rows = []
        for plan in plans:
            result = self.evaluator.score(plan)
            row = {
                "date": plan.meal_time.date() if plan.meal_time else None,
                "recipe": plan.recipe.title,
                "servings": plan.servings,
            }
            row.update(result.totals.to_dict())
            row["cost"] = result.cost
            row["fitness"] = result.fitness
            rows.append(row)

        columns = ["date", "recipe", "servings", *NUTRIENT_FIELDS, "cost", "fitness"]
        return pd.DataFrame(rows, columns=columns)

    def render_plans(self, plans: List[MealPlan], title: str = "Meal Plan") -> None:
        df = self.build_frame(plans)

        table = Table(title=title)
        table.add_column("Date")
        table.add_column("Recipe")
        table.add_column("Srv", justify="right")
        for name in NUTRIENT_FIELDS:
            table.add_column(name.capitalize(), justify="right")
        table.add_column("Cost", justify="right")
        table.add_column("Fitness", justify="right")

        for _, row in df.iterrows():
            table.add_row(
                str(row["date"] or "-"),
                str(row["recipe"]),
                str(row["servings"]),
                *[f"{row[name]:.1f}" for name in NUTRIENT_FIELDS],
                f"{row['cost']:.0f}",
                f"{row['fitness']:.2f}",
            )

        self.console.print(table)

    def render_run_summary(self, summaries: List[DayRunSummary]) -> None:
        table = Table(title="Search Summary")
        table.add_column("Date")
        table.add_column("Generations", justify="right")
        table.add_column("Best fitness", justify="right")
        table.add_column("Stopped by")

        for summary in summaries:
            table.add_row(
                str(summary.day),
                str(summary.generations),
                f"{summary.best_fitness:.3f}",
                summary.termination,
            )

        self.console.print(table)

    def render_shopping_list(self, shopping: ShoppingList) -> None:
        df = shopping.to_dataframe()

        table = Table(title="Shopping List")
        table.add_column("Ingredient")
        table.add_column("Quantity", justify="right")
        table.add_column("Unit")
        table.add_column("Cost", justify="right")

        for _, row in df.iterrows():
            table.add_row(row["name"], f"{row['quantity']:.3f}", row["unit"], str(row["cost"]))

        self.console.print(table)
        self.console.print(f"[bold]Total cost:[/bold] {shopping.total_cost}")
