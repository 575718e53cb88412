"""
Configuration for the Recipe Planner application.

Toggle between PRODUCTION and DEVELOPMENT mode, either here or with
the RECIPE_PLANNER_MODE environment variable.
"""
import logging
import os
from pathlib import Path

# ==================== MODE SELECTION ====================
MODE = os.environ.get("RECIPE_PLANNER_MODE", "DEVELOPMENT").upper()
# ========================================================

# Base paths
PROJECT_ROOT = Path(__file__).parent
PRODUCTION_DATA_PATH = Path(os.environ.get("RECIPE_PLANNER_DATA", "/var/lib/recipe-planner"))
DEVELOPMENT_DATA_PATH = PROJECT_ROOT / "data"

# Select data path based on mode
if MODE == "PRODUCTION":
    DATA_PATH = PRODUCTION_DATA_PATH
elif MODE == "DEVELOPMENT":
    DATA_PATH = DEVELOPMENT_DATA_PATH
else:
    raise ValueError(f"Invalid MODE: {MODE}. Must be 'PRODUCTION' or 'DEVELOPMENT'")

# File paths
INGREDIENTS_FILE = DATA_PATH / "ingredients.csv"
RECIPES_FILE = DATA_PATH / "recipes.csv"
RECIPE_INGREDIENTS_FILE = DATA_PATH / "recipe_ingredients.csv"
SETTINGS_FILE = DATA_PATH / "settings.json"

# Chart output
CHART_OUTPUT_FILE = DATA_PATH / "meal_plan_convergence.jpg"

# Application settings
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def verify_data_files():
    """Check that all required data files exist."""
    missing = []

    for file_path in [INGREDIENTS_FILE, RECIPES_FILE, RECIPE_INGREDIENTS_FILE, SETTINGS_FILE]:
        if not file_path.exists():
            missing.append(str(file_path))

    if missing:
        raise FileNotFoundError(
            f"Missing data files in {MODE} mode:\n" +
            "\n".join(f"  - {f}" for f in missing)
        )

    return True


def configure_logging(level: str = None):
    """Set up root logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).debug("Mode %s, data path %s", MODE, DATA_PATH)


if __name__ == "__main__":
    # Test configuration
    print(f"\nMode: {MODE}")
    print(f"Data Path: {DATA_PATH}")
    print(f"Ingredients File: {INGREDIENTS_FILE}")
    print(f"Recipes File: {RECIPES_FILE}")
    print(f"Recipe Ingredients File: {RECIPE_INGREDIENTS_FILE}")
    print(f"Settings File: {SETTINGS_FILE}")
    print(f"\nFiles exist: {verify_data_files()}")
