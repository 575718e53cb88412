"""
Tests for the genetic meal planner.
"""
import random
from datetime import date, datetime, time

import pytest

from conftest import make_ingredient, make_recipe
from recipe_planner.data import InMemoryRecipeCatalog
from recipe_planner.errors import (
    EmptyCatalog, PlannerError, UnitConversionError, UnsupportedUnitClass,
)
from recipe_planner.generators import (
    FitnessEvaluator, GeneticMealPlanner, PlannerConfig, Population,
)
from recipe_planner.generators.genetic import (
    TERMINATED_MAX_GENERATIONS, TERMINATED_STAGNATION, ConvergenceTracker,
)
from recipe_planner.models import MealCategory, MealPlan, MealPlanParams


def _population(fitness):
    members = [MealPlan(recipe=make_recipe(recipe_id=i), servings=2) for i in range(len(fitness))]
    return Population(members=members, fitness=list(fitness))


# ConvergenceTracker tests
def test_tracker_generation_zero_always_taken():
    """Test the first generation sets the running best unconditionally."""
    tracker = ConvergenceTracker()
    assert tracker.record(0, _population([5.0, 3.0]))
    assert tracker.best_fitness == 3.0
    assert tracker.best_plan.recipe_id == 1


def test_tracker_only_strict_improvement():
    """Test equal or worse generations keep the earlier best."""
    tracker = ConvergenceTracker()
    first = _population([3.0])
    tracker.record(0, first)

    assert not tracker.record(1, _population([3.0]))
    assert not tracker.record(2, _population([8.0]))
    assert tracker.best_plan is first.members[0]
    assert tracker.record(3, _population([1.0]))
    assert tracker.history == [3.0, 3.0, 3.0, 1.0]


def test_tracker_not_stagnant_within_window():
    """Test stagnation needs more than window generations."""
    tracker = ConvergenceTracker(stagnation_window=3)
    for generation in range(4):
        tracker.record(generation, _population([1.0]))
        assert not tracker.is_stagnant(generation)


def test_tracker_stagnant_after_flat_window():
    """Test a flat best over the window is stagnation."""
    tracker = ConvergenceTracker(stagnation_window=3)
    for generation in range(5):
        tracker.record(generation, _population([1.0]))
    assert tracker.is_stagnant(4)


def test_tracker_small_improvements_count_as_stagnant():
    """Test improvements at or under the threshold do not reset stagnation."""
    tracker = ConvergenceTracker(stagnation_window=3, improvement_threshold=0.01)
    for generation, value in enumerate([10.0, 9.995, 9.99, 9.985, 9.98]):
        tracker.record(generation, _population([value]))
    assert tracker.is_stagnant(4)


def test_tracker_recent_improvement_not_stagnant():
    """Test one large step inside the window keeps the search going."""
    tracker = ConvergenceTracker(stagnation_window=3)
    for generation, value in enumerate([10.0, 10.0, 10.0, 10.0, 5.0]):
        tracker.record(generation, _population([value]))
    assert not tracker.is_stagnant(4)


# day_count tests
def test_day_count_whole_days():
    """Test a one-week range."""
    assert GeneticMealPlanner.day_count(date(2024, 1, 1), date(2024, 1, 8)) == 7


def test_day_count_partial_day_rounds_up():
    """Test a partial trailing day counts."""
    start = datetime(2024, 1, 1, 0, 0)
    end = datetime(2024, 1, 3, 6, 0)
    assert GeneticMealPlanner.day_count(start, end) == 3


def test_day_count_empty_and_inverted():
    """Test empty and inverted ranges give zero days."""
    assert GeneticMealPlanner.day_count(date(2024, 1, 1), date(2024, 1, 1)) == 0
    assert GeneticMealPlanner.day_count(date(2024, 1, 5), date(2024, 1, 1)) == 0


# GeneticMealPlanner tests
def test_invalid_config_rejected(catalog, converter):
    """Test planner refuses an invalid config."""
    with pytest.raises(ValueError):
        GeneticMealPlanner(catalog, converter, PlannerConfig(population_size=0))


def test_plan_one_result_per_day(catalog, converter, wide_params, small_config):
    """Test N days give N breakfast plans at the requested time."""
    planner = GeneticMealPlanner(catalog, converter, small_config)
    plans = planner.plan(date(2024, 3, 1), date(2024, 3, 4), time(8, 30), "breakfast", wide_params)

    assert len(plans) == 3
    assert [p.meal_time for p in plans] == [
        datetime(2024, 3, 1, 8, 30),
        datetime(2024, 3, 2, 8, 30),
        datetime(2024, 3, 3, 8, 30),
    ]
    for plan in plans:
        assert plan.recipe.matches(MealCategory.BREAKFAST)
        assert plan.servings == wide_params.servings

    assert len(planner.last_run) == 3
    assert [s.day for s in planner.last_run] == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]


def test_plan_finds_best_recipe(catalog, converter, wide_params):
    """Test the lowest-calorie breakfast wins against a zero target."""
    config = PlannerConfig(population_size=30, max_generations=15, max_workers=3, seed=1)
    plans = GeneticMealPlanner(catalog, converter, config).plan(
        date(2024, 1, 1), date(2024, 1, 2), time(7, 0), MealCategory.BREAKFAST, wide_params
    )
    assert plans[0].recipe_id == 1


def test_plan_running_best_never_worsens(catalog, converter, wide_params, small_config):
    """Test recorded best fitness is non-increasing."""
    planner = GeneticMealPlanner(catalog, converter, small_config)
    planner.plan(date(2024, 1, 1), date(2024, 1, 3), None, "breakfast", wide_params)

    for summary in planner.last_run:
        history = summary.history
        assert all(later <= earlier for earlier, later in zip(history, history[1:]))
        assert summary.best_fitness == history[-1]
        assert summary.generations == len(history)


def test_plan_scales_servings(converter):
    """Test a 2-serving recipe with 1 kg is planned as 2 kg for 4 servings."""
    recipe = make_recipe(servings=2, ingredients=[(make_ingredient(), 1.0, "kg")], is_dinner=True)
    planner = GeneticMealPlanner(
        InMemoryRecipeCatalog([recipe]),
        converter=converter,
        config=PlannerConfig(population_size=1, max_generations=3, seed=0),
    )
    params = MealPlanParams(servings=4)

    plans = planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(19, 0), "dinner", params)

    assert len(plans) == 1
    planned = plans[0].recipe.ingredients[0]
    assert planned.quantity == pytest.approx(2.0)
    assert planned.unit == "kg"
    assert recipe.ingredients[0].quantity == 1.0


def test_plan_empty_category(catalog, converter, wide_params, small_config):
    """Test a category with no recipes raises EmptyCatalog."""
    planner = GeneticMealPlanner(catalog, converter, small_config)
    with pytest.raises(EmptyCatalog) as excinfo:
        planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(15, 0), "snack", wide_params)
    assert excinfo.value.category == "snack"
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__


def test_plan_empty_range(catalog, converter, wide_params, small_config):
    """Test an empty range plans nothing."""
    planner = GeneticMealPlanner(catalog, converter, small_config)
    assert planner.plan(date(2024, 1, 2), date(2024, 1, 2), time(8, 0), "snack", wide_params) == []
    assert planner.last_run == []


def test_plan_unsupported_unit_class(converter, wide_params, small_config):
    """Test an unsupported unit class aborts the run."""
    egg = make_ingredient(unit_class="count")
    catalog = InMemoryRecipeCatalog([make_recipe(ingredients=[(egg, 2, "piece")], is_lunch=True)])
    planner = GeneticMealPlanner(catalog, converter, small_config)
    with pytest.raises(UnsupportedUnitClass):
        planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(12, 0), "lunch", wide_params)


def test_plan_unit_conversion_error(converter, wide_params, small_config):
    """Test an ingredient unit with no conversion rate aborts the run."""
    flour = make_ingredient()
    catalog = InMemoryRecipeCatalog([make_recipe(ingredients=[(flour, 1, "stone")], is_lunch=True)])
    planner = GeneticMealPlanner(catalog, converter, small_config)
    with pytest.raises(UnitConversionError) as excinfo:
        planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(12, 0), "lunch", wide_params)
    assert excinfo.value.from_unit == "stone"


def test_plan_errors_are_value_errors(converter, wide_params, small_config):
    """Test planner errors can be caught as ValueError."""
    planner = GeneticMealPlanner(InMemoryRecipeCatalog([]), converter, small_config)
    with pytest.raises(ValueError) as excinfo:
        planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(12, 0), "lunch", wide_params)
    assert isinstance(excinfo.value, PlannerError)


def test_plan_seeded_runs_reproducible(catalog, converter, wide_params):
    """Test equal seeds and worker counts give identical plans."""
    def run():
        config = PlannerConfig(population_size=10, max_generations=8, max_workers=2, seed=123)
        planner = GeneticMealPlanner(catalog, converter, config)
        plans = planner.plan(date(2024, 1, 1), date(2024, 1, 5), time(8, 0), "breakfast", wide_params)
        return [p.recipe_id for p in plans], [s.history for s in planner.last_run]

    assert run() == run()


def test_plan_stops_on_stagnation(converter, wide_params):
    """Test a flat search stops once the window has passed."""
    recipe = make_recipe(is_breakfast=True)
    config = PlannerConfig(population_size=4, max_generations=50, seed=0, stagnation_window=10)
    planner = GeneticMealPlanner(InMemoryRecipeCatalog([recipe]), converter, config)

    planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(8, 0), "breakfast", wide_params)

    summary = planner.last_run[0]
    assert summary.termination == TERMINATED_STAGNATION
    assert summary.generations == 12


def test_plan_stops_at_max_generations(converter, wide_params):
    """Test the generation cap ends a search that has not stagnated."""
    recipe = make_recipe(is_breakfast=True)
    config = PlannerConfig(population_size=4, max_generations=5, seed=0)
    planner = GeneticMealPlanner(InMemoryRecipeCatalog([recipe]), converter, config)

    planner.plan(date(2024, 1, 1), date(2024, 1, 2), time(8, 0), "breakfast", wide_params)

    summary = planner.last_run[0]
    assert summary.termination == TERMINATED_MAX_GENERATIONS
    assert summary.generations == 5


def test_plan_uses_evaluator_factory(catalog, converter, wide_params):
    """Test a custom evaluator drives the search."""
    class PreferLargestId(FitnessEvaluator):
        def evaluate(self, plan):
            return -float(plan.recipe_id)

    config = PlannerConfig(population_size=30, max_generations=10, seed=4, max_workers=2)
    planner = GeneticMealPlanner(catalog, converter, config, evaluator_factory=PreferLargestId)
    plans = planner.plan(date(2024, 1, 1), date(2024, 1, 2), None, "breakfast", wide_params)

    assert plans[0].recipe_id == 3
    assert plans[0].meal_time is None


def test_plan_injected_rng(catalog, converter, wide_params):
    """Test an injected random source replaces the config seed."""
    config = PlannerConfig(population_size=6, max_generations=4, max_workers=1)
    first = GeneticMealPlanner(catalog, converter, config, rng=random.Random(99))
    second = GeneticMealPlanner(catalog, converter, config, rng=random.Random(99))

    args = (date(2024, 1, 1), date(2024, 1, 3), time(8, 0), "breakfast", wide_params)
    assert [p.recipe_id for p in first.plan(*args)] == [p.recipe_id for p in second.plan(*args)]
