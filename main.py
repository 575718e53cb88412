"""
Recipe Planner - Main Entry Point

Plans one meal per day over a date range with the genetic meal
planner and prints the result.
"""
import argparse
import logging
import sys
from datetime import datetime

from rich.console import Console

from config import (
    CHART_OUTPUT_FILE, DATE_FORMAT, INGREDIENTS_FILE, MODE, RECIPE_INGREDIENTS_FILE,
    RECIPES_FILE, SETTINGS_FILE, TIME_FORMAT, configure_logging, verify_data_files,
)
from recipe_planner.data import CsvRecipeCatalog, SettingsManager
from recipe_planner.errors import PlannerError
from recipe_planner.generators import FitnessEvaluator, GeneticMealPlanner
from recipe_planner.models import MealCategory
from recipe_planner.reports import ConvergenceChartBuilder, PlanReport
from recipe_planner.shopping import ShoppingListBuilder
from recipe_planner.units import UnitConverter

logger = logging.getLogger("recipe_planner.cli")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan one meal per day with a genetic search.")
    parser.add_argument("--start", required=True,
                        type=lambda s: datetime.strptime(s, DATE_FORMAT).date(),
                        help="First day (YYYY-MM-DD)")
    parser.add_argument("--end", required=True,
                        type=lambda s: datetime.strptime(s, DATE_FORMAT).date(),
                        help="Day after the last planned day (YYYY-MM-DD)")
    parser.add_argument("--category", required=True,
                        choices=[c.value for c in MealCategory],
                        help="Meal category to plan")
    parser.add_argument("--meal-time", default="12:00",
                        type=lambda s: datetime.strptime(s, TIME_FORMAT).time(),
                        help="Time of day for the meal (HH:MM)")
    parser.add_argument("--servings", type=int, help="Override servings from settings")
    parser.add_argument("--seed", type=int, help="Override random seed from settings")
    parser.add_argument("--chart", action="store_true", help="Save a convergence chart")
    parser.add_argument("--shopping-list", action="store_true", help="Print a shopping list")
    parser.add_argument("--log-level", help="Logging level (default from LOG_LEVEL)")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, console: Console) -> int:
    """Execute one planning request. Returns the exit status."""
    settings = SettingsManager(SETTINGS_FILE)
    if not settings.load():
        console.print(f"[red]{settings.get_error_message()}[/red]")
        return 1

    config = settings.planner_config
    params = settings.params
    if args.seed is not None:
        config.seed = args.seed
    if args.servings is not None:
        params.servings = args.servings

    converter = UnitConverter(config.default_mass_unit, config.default_volume_unit)
    catalog = CsvRecipeCatalog(INGREDIENTS_FILE, RECIPES_FILE, RECIPE_INGREDIENTS_FILE)
    planner = GeneticMealPlanner(catalog, converter, config)

    console.print(config.summary())

    try:
        plans = planner.plan(args.start, args.end, args.meal_time, args.category, params)
    except PlannerError as e:
        console.print(f"[red]Planning failed:[/red] {e}")
        return 1

    if not plans:
        console.print("No days in the requested range.")
        return 0

    report = PlanReport(FitnessEvaluator(params, converter), console)
    report.render_plans(plans, title=f"{args.category.capitalize()} plan")
    report.render_run_summary(planner.last_run)

    if args.shopping_list:
        shopping = ShoppingListBuilder(converter).build(plans)
        report.render_shopping_list(shopping)

    if args.chart:
        path = ConvergenceChartBuilder(CHART_OUTPUT_FILE).build(planner.last_run)
        if path:
            console.print(f"Chart saved to {path}")

    return 0


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.log_level)
    console = Console()

    try:
        verify_data_files()
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("\nPlease check your configuration and ensure data files exist.")
        return 1

    try:
        return run(args, console)
    except KeyboardInterrupt:
        console.print("\nInterrupted.")
        return 130
    except Exception:
        logger.exception("Fatal error")
        if MODE == "DEVELOPMENT":
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
