from .tsp import City, TSPInstance, DistanceMatrix, route_distance
from .solver_base import SolverConfig, TSPResult, CapacityExceededError, InvalidInputError, HARD_MAX_CITIES
from .held_karp import held_karp
from .nearest_neighbor import nearest_neighbor
from .two_opt import two_opt, reverse_segment, TwoOptHistory
from .solver import TSPSolver, solve, solve_with_names
from .validation import parse_cities, parse_route, load_cities
from .experiments import run_repeated_trials, run_threshold_sweep, brute_force, append_csv_row
