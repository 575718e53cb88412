# recipe_planner/generators/ga_config.py
"""
Configuration adapter for the genetic meal planner.

Reads and validates the 'planner' block of the settings file,
providing typed access to all search parameters. Values are checked
by from_config() and again by GeneticMealPlanner before a run starts;
constructing a PlannerConfig directly does not validate it.

Expected settings.json structure:
{
    "planner": {
        "population_size": 100,
        "max_generations": 50,
        "crossover_rate": 0.7,
        "mutation_rate": 0.1,
        "max_workers": null,
        "seed": null,
        "stagnation_window": 10,
        "improvement_threshold": 0.01,
        "default_mass_unit": "kg",
        "default_volume_unit": "l"
    }
}
"""
import os
from dataclasses import dataclass
from typing import List, Dict, Any, Optional


@dataclass
class PlannerConfig:
    """
    Typed access to the 'planner' settings block.

    mutation_rate is accepted and validated but no operator reads it:
    the search has selection and positional crossover only.
    """
    # Population
    population_size: int = 100
    max_generations: int = 50

    # Operator rates
    crossover_rate: float = 0.7
    mutation_rate: float = 0.1

    # Execution
    max_workers: Optional[int] = None
    seed: Optional[int] = None

    # Termination
    stagnation_window: int = 10
    improvement_threshold: float = 0.01

    # Units ingredients are normalized to
    default_mass_unit: str = "kg"
    default_volume_unit: str = "l"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'PlannerConfig':
        """
        Extract and validate the 'planner' block.

        Accepts either the full settings dict (looks for 'planner' key)
        or just the planner sub-dict directly.

        Args:
            config: Full settings dict or planner sub-dict

        Returns:
            Validated PlannerConfig instance

        Raises:
            ValueError: If the block is not a dict or contains invalid values
        """
        if "planner" in config:
            block = config["planner"]
        else:
            block = config

        if not isinstance(block, dict):
            raise ValueError("'planner' config must be a dict")

        defaults = cls()
        instance = cls(
            population_size=block.get("population_size", defaults.population_size),
            max_generations=block.get("max_generations", defaults.max_generations),
            crossover_rate=block.get("crossover_rate", defaults.crossover_rate),
            mutation_rate=block.get("mutation_rate", defaults.mutation_rate),
            max_workers=block.get("max_workers", defaults.max_workers),
            seed=block.get("seed", defaults.seed),
            stagnation_window=block.get("stagnation_window", defaults.stagnation_window),
            improvement_threshold=block.get("improvement_threshold", defaults.improvement_threshold),
            default_mass_unit=block.get("default_mass_unit", defaults.default_mass_unit),
            default_volume_unit=block.get("default_volume_unit", defaults.default_volume_unit),
        )

        errors = instance.validate()
        if errors:
            error_msg = "Planner config validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ValueError(error_msg)

        return instance

    @property
    def worker_count(self) -> int:
        """Size of the worker pool (max_workers, else CPU count)."""
        if self.max_workers:
            return self.max_workers
        return os.cpu_count() or 1

    def validate(self) -> List[str]:
        """
        Validate all config values.

        Returns:
            List of error messages. Empty list means valid.
        """
        errors = []

        if not _is_int(self.population_size) or self.population_size < 1:
            errors.append(f"population_size must be integer >= 1, got {self.population_size}")

        if not _is_int(self.max_generations) or self.max_generations < 1:
            errors.append(f"max_generations must be integer >= 1, got {self.max_generations}")

        for name, rate in [("crossover_rate", self.crossover_rate),
                           ("mutation_rate", self.mutation_rate)]:
            if not _is_number(rate) or rate < 0.0 or rate > 1.0:
                errors.append(f"{name} must be 0.0-1.0, got {rate}")

        if self.max_workers is not None and (not _is_int(self.max_workers) or self.max_workers < 1):
            errors.append(f"max_workers must be null or integer >= 1, got {self.max_workers}")

        if self.seed is not None and not _is_int(self.seed):
            errors.append(f"seed must be null or integer, got {self.seed}")

        if not _is_int(self.stagnation_window) or self.stagnation_window < 1:
            errors.append(f"stagnation_window must be integer >= 1, got {self.stagnation_window}")

        if not _is_number(self.improvement_threshold) or self.improvement_threshold < 0.0:
            errors.append(f"improvement_threshold must be >= 0.0, got {self.improvement_threshold}")

        for name, unit in [("default_mass_unit", self.default_mass_unit),
                           ("default_volume_unit", self.default_volume_unit)]:
            if not isinstance(unit, str) or not unit.strip():
                errors.append(f"{name} must be a non-empty string, got {unit!r}")

        return errors

    def summary(self) -> str:
        """
        Human-readable summary of planner configuration for display.

        Returns:
            Multi-line string with key parameters
        """
        workers = self.max_workers if self.max_workers else f"auto ({self.worker_count})"
        lines = [
            "=== Planner Configuration ===",
            f"Population size:      {self.population_size}",
            f"Max generations:      {self.max_generations}",
            f"Operators:            crossover={self.crossover_rate:.0%} "
            f"mutation={self.mutation_rate:.0%} (inactive)",
            f"Stagnation:           {self.stagnation_window} generations, "
            f"threshold {self.improvement_threshold}",
            f"Workers:              {workers}",
            f"Seed:                 {self.seed if self.seed is not None else 'random'}",
            f"Default units:        mass={self.default_mass_unit} volume={self.default_volume_unit}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize back to settings-compatible dict.

        Returns:
            Dict matching the expected 'planner' block
        """
        return {
            "population_size": self.population_size,
            "max_generations": self.max_generations,
            "crossover_rate": self.crossover_rate,
            "mutation_rate": self.mutation_rate,
            "max_workers": self.max_workers,
            "seed": self.seed,
            "stagnation_window": self.stagnation_window,
            "improvement_threshold": self.improvement_threshold,
            "default_mass_unit": self.default_mass_unit,
            "default_volume_unit": self.default_volume_unit,
        }


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
