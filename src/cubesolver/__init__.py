from cubesolver.cube import decode, describe, encode, generate_scramble, is_solved, scramble, validate
from cubesolver.exceptions import CenterMismatchError, ColorCountError, ValidationError
from cubesolver.solver import CubeSolver, solve

__version__ = "0.1.0"
