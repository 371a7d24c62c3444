import abc
from itertools import count
from typing import Any, Dict, Optional


class Solution:
    """Represents a candidate plan for an optimization problem."""
    _id_counter = count()

    def __init__(self, representation: Any, problem: 'ProblemInterface', *, solution_id: Optional[int] = None):
        self.representation = representation
        self.problem = problem
        self.fitness: Optional[float] = None
        # Stable identifier so callers can tell plans apart cheaply.
        self.id: int = int(next(self._id_counter) if solution_id is None else solution_id)

    def evaluate(self):
        """Calculates and stores the fitness of this solution."""
        if self.fitness is None:
            self.fitness = self.problem.evaluate(self)
        return self.fitness

    def copy(self, *, preserve_id: bool = True):
        """Creates a copy of this solution.

        Args:
            preserve_id: When True (default), the clone keeps the same `id`.
        """
        new_id = self.id if preserve_id else None
        if isinstance(self.representation, list):
            new_repr = list(self.representation)
        else:
            # Tuples and other immutable plans can be shared.
            new_repr = self.representation
        new_solution = Solution(new_repr, self.problem, solution_id=new_id)
        new_solution.fitness = self.fitness
        return new_solution

    def __lt__(self, other: 'Solution') -> bool:
        """Allows comparison based on fitness (higher accrued value is better)."""
        if self.fitness is None or other.fitness is None:
            return False
        return self.fitness < other.fitness

    def __gt__(self, other: 'Solution') -> bool:
        if self.fitness is None or other.fitness is None:
            return False
        return self.fitness > other.fitness

    def __eq__(self, other: object) -> bool:
        """Checks if two solutions are equal based on representation."""
        if not isinstance(other, Solution):
            return NotImplemented
        return tuple(self.representation) == tuple(other.representation)

    def __hash__(self) -> int:
        return hash(tuple(self.representation))

    def __str__(self) -> str:
        return f"Solution({self.representation}, Fitness: {self.fitness})"


class ProblemInterface(abc.ABC):
    """
    Abstract base class defining the interface for an optimization problem.
    Problems in this repository are maximization problems.
    """

    @abc.abstractmethod
    def evaluate(self, solution: Solution) -> float:
        """
        Evaluates the fitness of a given solution. Higher values are better.

        Args:
            solution: The Solution object to evaluate.

        Returns:
            The fitness value.
        """
        pass

    @abc.abstractmethod
    def get_initial_solution(self) -> Solution:
        """
        Returns a valid starting solution for the search.
        """
        pass

    @abc.abstractmethod
    def get_problem_info(self) -> Dict[str, Any]:
        """
        Returns a dictionary containing essential information about the problem.
        Examples: 'dimension', 'problem_type', 'budget'.
        """
        pass

    def get_bounds(self) -> Dict[str, Any]:
        """
        Optional hook to expose fitness bounds.
        Subclasses can override this for richer metadata; default returns an empty dict.
        """
        return {}
