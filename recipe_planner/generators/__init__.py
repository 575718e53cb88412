"""
Genetic meal-plan search.
"""
from .ga_config import PlannerConfig
from .ga_scoring import FitnessEvaluator, FitnessResult
from .ga_population import Population, PopulationManager
from .ga_workers import WorkerPool
from .genetic import GeneticMealPlanner, DayRunSummary

__all__ = [
    'PlannerConfig',
    'FitnessEvaluator',
    'FitnessResult',
    'Population',
    'PopulationManager',
    'WorkerPool',
    'GeneticMealPlanner',
    'DayRunSummary',
]
