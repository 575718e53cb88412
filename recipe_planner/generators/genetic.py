# recipe_planner/generators/genetic.py
"""
Genetic algorithm orchestrator for meal planning.

Produces one meal plan per calendar day in a date range. Each day is
an independent search:

    INIT -> loop { EVALUATE -> TRACK_BEST -> CHECK_TERMINATION
                   -> SELECT -> CROSSOVER }

The running best candidate is the only state carried between
generations; nothing is carried between days. Days run one after
another; within a day, the population phases run on a worker pool.

Classes:
    ConvergenceTracker - Running best and best-fitness history for one day
    DayRunSummary      - Reporting record for one day's search
    GeneticMealPlanner - Top-level orchestrator
"""
import logging
import math
import random
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional

from recipe_planner.data.recipe_catalog import RecipeCatalog
from recipe_planner.errors import EmptyCatalog, RecipeNotFound
from recipe_planner.generators.ga_config import PlannerConfig
from recipe_planner.generators.ga_population import Population, PopulationManager
from recipe_planner.generators.ga_scoring import FitnessEvaluator
from recipe_planner.generators.ga_workers import WorkerPool
from recipe_planner.models import MealCategory, MealPlan, MealPlanParams

logger = logging.getLogger(__name__)

TERMINATED_MAX_GENERATIONS = "max_generations"
TERMINATED_STAGNATION = "stagnation"


# =============================================================================
# ConvergenceTracker
# =============================================================================

@dataclass
class ConvergenceTracker:
    """
    Running best for one day's search.

    history[g] is the running best fitness after generation g, kept
    by generation number so the stagnation window always compares
    genuinely tracked values.
    """
    stagnation_window: int = 10
    improvement_threshold: float = 0.01
    best_plan: Optional[MealPlan] = None
    best_fitness: float = math.inf
    history: List[float] = field(default_factory=list)

    def record(self, generation: int, population: Population) -> bool:
        """
        Update the running best from an evaluated generation.

        The generation's best replaces the running best if it is
        strictly lower, or unconditionally on generation 0.

        Returns:
            True if the running best changed
        """
        index = population.best_index()
        fitness = population.fitness[index]

        improved = generation == 0 or fitness < self.best_fitness
        if improved:
            self.best_fitness = fitness
            self.best_plan = population.members[index]

        self.history.append(self.best_fitness)
        return improved

    def is_stagnant(self, generation: int) -> bool:
        """
        True once more than stagnation_window generations have run and
        no step within the trailing window improved the best by more
        than improvement_threshold.
        """
        window = self.stagnation_window
        if generation <= window or len(self.history) <= window:
            return False

        for i in range(window):
            newer = self.history[generation - i]
            older = self.history[generation - i - 1]
            if older - newer > self.improvement_threshold:
                return False
        return True


# =============================================================================
# DayRunSummary
# =============================================================================

@dataclass
class DayRunSummary:
    """Reporting record for one day's search."""
    day: date
    generations: int
    best_fitness: float
    termination: str
    history: List[float] = field(default_factory=list)


# =============================================================================
# GeneticMealPlanner
# =============================================================================

class GeneticMealPlanner:
    """
    Top-level orchestrator for the meal-plan search.

    Usage:
        planner = GeneticMealPlanner(catalog, UnitConverter(), PlannerConfig(seed=7))
        plans = planner.plan(date(2024, 1, 1), date(2024, 1, 8),
                             time(8, 0), "breakfast", params)
    """

    def __init__(
        self,
        catalog: RecipeCatalog,
        converter,
        config: Optional[PlannerConfig] = None,
        rng: Optional[random.Random] = None,
        evaluator_factory: Optional[Callable[[MealPlanParams, object], FitnessEvaluator]] = None,
    ):
        """
        Args:
            catalog: Source of candidate recipes
            converter: UnitConverter shared by adjustment and scoring
            config: Planner configuration (defaults if omitted)
            rng: Random source; defaults to random.Random(config.seed)
            evaluator_factory: Builds the evaluator for a parameter set
                               (defaults to FitnessEvaluator)
        """
        self.catalog = catalog
        self.converter = converter
        self.config = config or PlannerConfig()

        errors = self.config.validate()
        if errors:
            raise ValueError("Planner config validation failed:\n" + "\n".join(f"  - {e}" for e in errors))

        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.evaluator_factory = evaluator_factory or FitnessEvaluator

        # Filled by plan(); one entry per day of the last run
        self.last_run: List[DayRunSummary] = []

    # =========================================================================
    # Public API
    # =========================================================================

    def plan(
        self,
        start_date,
        end_date,
        meal_time,
        meal_category,
        params: MealPlanParams,
    ) -> List[MealPlan]:
        """
        Plan one meal per day from start_date (inclusive) to end_date
        (exclusive).

        Args:
            start_date: First day (date or datetime)
            end_date: Day after the last one (date or datetime)
            meal_time: Time of day for the meal (time or datetime);
                       None leaves meal_time unset on results
            meal_category: MealCategory or its string value
            params: Servings and nutrient targets/bounds

        Returns:
            One MealPlan per day, in date order

        Raises:
            EmptyCatalog: No recipe matches the category
            InvalidServings, EmptyRecipe, UnsupportedUnitClass,
            UnitConversionError: from adjustment or scoring
        """
        category = MealCategory.parse(meal_category)
        days = self.day_count(start_date, end_date)
        evaluator = self.evaluator_factory(params, self.converter)

        logger.info(
            "Planning %d day(s) of %s from %s (population=%d, generations=%d)",
            days, category.value, _as_date(start_date),
            self.config.population_size, self.config.max_generations,
        )

        summaries: List[DayRunSummary] = []
        results: List[MealPlan] = []

        with WorkerPool(self.config.worker_count) as pool:
            manager = PopulationManager(self.config, self.converter, pool)

            for offset in range(days):
                day = _as_date(start_date) + timedelta(days=offset)
                best, summary = self._run_day(day, category, params, manager, evaluator)
                results.append(replace(best, meal_time=_combine(day, meal_time)))
                summaries.append(summary)

        self.last_run = summaries
        return results

    @staticmethod
    def day_count(start_date, end_date) -> int:
        """
        Number of days in [start_date, end_date), rounded up.

        Returns 0 for empty or inverted ranges.
        """
        delta = _as_datetime(end_date) - _as_datetime(start_date)
        seconds = delta.total_seconds()
        if seconds <= 0:
            return 0
        return math.ceil(seconds / timedelta(days=1).total_seconds())

    # =========================================================================
    # Per-day search
    # =========================================================================

    def _run_day(self, day: date, category: MealCategory, params: MealPlanParams,
                 manager: PopulationManager, evaluator: FitnessEvaluator):
        recipes = self._candidate_recipes(category)
        population = manager.initialize(recipes, params.servings, self.rng, category.value)

        tracker = ConvergenceTracker(
            stagnation_window=self.config.stagnation_window,
            improvement_threshold=self.config.improvement_threshold,
        )
        termination = TERMINATED_MAX_GENERATIONS
        generations = 0

        for generation in range(self.config.max_generations):
            manager.evaluate(population, evaluator)
            tracker.record(generation, population)
            generations = generation + 1

            logger.debug(
                "%s gen %d: best=%.3f running=%.3f",
                day, generation, min(population.fitness), tracker.best_fitness,
            )

            if tracker.is_stagnant(generation):
                termination = TERMINATED_STAGNATION
                break
            if generations >= self.config.max_generations:
                break

            population = manager.select(population, self.rng)
            population = manager.crossover(population, self.rng)

        summary = DayRunSummary(
            day=day,
            generations=generations,
            best_fitness=tracker.best_fitness,
            termination=termination,
            history=list(tracker.history),
        )
        logger.info(
            "%s: %s (fitness %.3f) after %d generation(s), stopped by %s",
            day, tracker.best_plan.recipe.title, tracker.best_fitness, generations, termination,
        )
        return tracker.best_plan, summary

    def _candidate_recipes(self, category: MealCategory):
        try:
            recipes = self.catalog.get_by_category(category)
        except RecipeNotFound:
            raise EmptyCatalog(category.value) from None
        if not recipes:
            raise EmptyCatalog(category.value)
        return recipes


# =============================================================================
# Date helpers
# =============================================================================

def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _combine(day: date, meal_time) -> Optional[datetime]:
    if meal_time is None:
        return None
    if isinstance(meal_time, datetime):
        meal_time = meal_time.timetz()
    return datetime.combine(day, meal_time)
