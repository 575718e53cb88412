# recipe_planner/generators/ga_population.py
"""
Population management for the genetic meal planner.

A Population is one day's ordered, fixed-size list of candidate meal
plans paired index-for-index with their fitness values. It is owned by
a single day's search and replaced at every generation boundary.

The PopulationManager drives the per-generation operators:

- initialize: sample recipes with replacement, build adjusted plans
- evaluate:   fitness for every member
- select:     binary tournament into a new population
- crossover:  positional swaps of adjacent pairs

Initialization, evaluation and crossover run on the WorkerPool over
disjoint index slices; selection runs on the orchestrating thread.

Classes:
    Population        - Candidates + fitness vector
    PopulationManager - Operators over a Population
"""
import logging
import random
from dataclasses import dataclass, field
from typing import List, Sequence

from recipe_planner.errors import EmptyCatalog
from recipe_planner.generators.ga_config import PlannerConfig
from recipe_planner.generators.ga_scoring import FitnessEvaluator
from recipe_planner.generators.ga_workers import WorkerPool
from recipe_planner.models import MealPlan, Recipe

logger = logging.getLogger(__name__)


# =============================================================================
# Population
# =============================================================================

@dataclass
class Population:
    """
    Candidates for one day, with fitness aligned by index.

    fitness is empty until the population has been evaluated.
    """
    members: List[MealPlan] = field(default_factory=list)
    fitness: List[float] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_evaluated(self) -> bool:
        return len(self.fitness) == len(self.members) and bool(self.members)

    def best_index(self) -> int:
        """
        Index of the lowest fitness (first one on ties).

        Raises:
            ValueError: Population has not been evaluated
        """
        if not self.is_evaluated:
            raise ValueError("Population has not been evaluated")
        best = 0
        for i, value in enumerate(self.fitness):
            if value < self.fitness[best]:
                best = i
        return best

    def copy(self) -> 'Population':
        """Shallow copy: new lists, same member objects."""
        return Population(members=list(self.members), fitness=list(self.fitness))


# =============================================================================
# PopulationManager
# =============================================================================

class PopulationManager:
    """
    Genetic operators over a Population.

    Members are never mutated after construction, so selection and
    crossover copy references between slots rather than plans.
    """

    def __init__(self, config: PlannerConfig, converter, pool: WorkerPool):
        """
        Args:
            config: Planner configuration (population size, crossover rate)
            converter: UnitConverter used for serving adjustment
            pool: Worker pool for the parallel phases
        """
        self.config = config
        self.converter = converter
        self.pool = pool

    # =========================================================================
    # Initialization
    # =========================================================================

    def initialize(self, recipes: Sequence[Recipe], servings: int,
                   rng: random.Random, category: str = "") -> Population:
        """
        Seed a new population from catalog recipes.

        Draws population_size recipes uniformly with replacement and
        builds a serving-adjusted MealPlan for each.

        Args:
            recipes: Candidate recipes for the meal category
            servings: Requested servings
            rng: Run random source
            category: Meal category, for the error message

        Returns:
            Unevaluated Population

        Raises:
            EmptyCatalog: recipes is empty
            InvalidServings, EmptyRecipe, UnsupportedUnitClass,
            UnitConversionError: from MealPlan.adjust_servings()
        """
        if not recipes:
            raise EmptyCatalog(category)

        recipes = list(recipes)

        def build_slice(start: int, stop: int, worker_rng: random.Random) -> List[MealPlan]:
            return [
                MealPlan.from_recipe(worker_rng.choice(recipes), servings, self.converter)
                for _ in range(start, stop)
            ]

        members = self.pool.map_slices(build_slice, self.config.population_size, rng)
        return Population(members=members)

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate(self, population: Population, evaluator: FitnessEvaluator) -> None:
        """
        Compute fitness for every member and store it on the population.

        Any scoring error aborts the whole phase and propagates.
        """
        members = population.members

        def score_slice(start: int, stop: int, _rng) -> List[float]:
            return [evaluator.evaluate(members[i]) for i in range(start, stop)]

        population.fitness = self.pool.map_slices(score_slice, len(members))

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, population: Population, rng: random.Random) -> Population:
        """
        Binary tournament selection.

        For each output slot, draw two distinct indices and copy the
        lower-fitness member (the second draw wins ties). The input
        population is read throughout and left unchanged.

        Args:
            population: Evaluated population
            rng: Run random source

        Returns:
            New Population of the same size, fitness aligned
        """
        if not population.is_evaluated:
            raise ValueError("Cannot select from an unevaluated population")

        size = population.size
        if size < 2:
            return population.copy()

        members: List[MealPlan] = []
        fitness: List[float] = []
        for _ in range(size):
            first = rng.randrange(size)
            second = rng.randrange(size)
            while second == first:
                second = rng.randrange(size)

            if population.fitness[first] < population.fitness[second]:
                winner = first
            else:
                winner = second

            members.append(population.members[winner])
            fitness.append(population.fitness[winner])

        return Population(members=members, fitness=fitness)

    # =========================================================================
    # Crossover
    # =========================================================================

    def crossover(self, population: Population, rng: random.Random) -> Population:
        """
        Positional recombination of adjacent pairs.

        Pairs are (0, 1), (2, 3), ...; an odd last member is left alone.
        Each pair swaps positions when a draw falls under crossover_rate
        and an independent coin flip comes up. Candidates are moved, never
        blended, so the multiset of members is unchanged.

        Args:
            population: Population to recombine
            rng: Run random source

        Returns:
            New Population with pairs swapped (fitness moves with members)
        """
        pair_count = population.size // 2
        rate = self.config.crossover_rate

        def swap_slice(start: int, stop: int, worker_rng: random.Random) -> List[bool]:
            decisions = []
            for _ in range(start, stop):
                crossed = worker_rng.random() < rate
                flip = worker_rng.random() < 0.5
                decisions.append(crossed and flip)
            return decisions

        swaps = self.pool.map_slices(swap_slice, pair_count, rng)

        result = population.copy()
        has_fitness = population.is_evaluated
        for pair, swap in enumerate(swaps):
            if not swap:
                continue
            a, b = 2 * pair, 2 * pair + 1
            result.members[a], result.members[b] = result.members[b], result.members[a]
            if has_fitness:
                result.fitness[a], result.fitness[b] = result.fitness[b], result.fitness[a]

        logger.debug("Crossover swapped %d of %d pairs", sum(swaps), pair_count)
        return result
