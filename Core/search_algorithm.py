import abc
from typing import Optional
from .problem import ProblemInterface, Solution # Use relative import


class SearchAlgorithm(abc.ABC):
    """
    Abstract base class for search algorithms.

    Subclasses keep their own frontier and advance it one unit of work per
    `step()` call, so callers can drive the search incrementally or drain it
    with `run()`.
    """

    def __init__(self, problem: ProblemInterface, **kwargs):
        """
        Initializes the search algorithm.

        Args:
            problem: An object implementing ProblemInterface.
            **kwargs: Algorithm-specific hyperparameters.
        """
        self.problem = problem
        self.best_solution: Optional[Solution] = None
        self.iteration = 0
        # Store kwargs for algorithm-specific use
        self._config = kwargs

    def initialize(self):
        """
        Sets up the algorithm's initial state.
        Should be called before starting the search steps.
        """
        self.iteration = 0
        self.best_solution = self.problem.get_initial_solution()
        self.best_solution.evaluate()

    @abc.abstractmethod
    def step(self) -> bool:
        """
        Performs a single unit of search work.

        Returns:
            True while there is work left, False once the search is exhausted.
        """
        pass

    def run(self, max_steps: Optional[int] = None) -> Optional[Solution]:
        """
        Steps until the search is exhausted or `max_steps` is reached.

        Returns:
            The best solution found so far.
        """
        steps = 0
        while max_steps is None or steps < max_steps:
            if not self.step():
                break
            steps += 1
            self.iteration += 1
        return self.get_best_solution()

    def get_best_solution(self) -> Optional[Solution]:
        """
        Returns the best solution found by the algorithm so far.

        Returns:
            The best Solution object found, or None if the search hasn't started.
        """
        return self.best_solution

    def get_best(self) -> Optional[Solution]:
        """Return best-so-far (compat name)."""
        return self.get_best_solution()
