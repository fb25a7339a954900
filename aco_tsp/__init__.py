from .tsp import TSPInstance
from .config import ACOConfig, ACOResult
from .pheromone import PheromoneMatrix
from .ant import Ant, AntState, select_next_city
from .best import BestTourTracker
from .colony import Colony
from .experiments import run_parameter_sweep, run_repeated_trials
