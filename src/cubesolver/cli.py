import argparse
import random

from cubesolver.benchmark import run_benchmark
from cubesolver.cube import (
    decode, describe, encode, format_state, generate_scramble, import_config, solved_state,
)
from cubesolver.exceptions import ValidationError
from cubesolver.moves import MOVES, apply_algorithm
from cubesolver.solver import IDDFS_TIME_LIMIT, MAX_SOLUTION_LENGTH, VISITED_LIMIT, CubeSolver


def build_parser():
    parser = argparse.ArgumentParser(description="Rubik's Cube solver with layered search strategies")

    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument('--scramble', type=str,
                            help='Scramble to apply to a solved cube, then solve (e.g., "R U F\' L2")')
    mode_group.add_argument('--random', type=int, metavar='N',
                            help='Solve a random scramble of N moves')
    mode_group.add_argument('--facelets', type=str, metavar='PATH',
                            help='JSON file mapping positions (U1 ... D9) to colors')
    mode_group.add_argument('--describe', action='store_true',
                            help='Print the description of every move')
    mode_group.add_argument('--benchmark', action='store_true',
                            help='Solve random scrambles and compare with Kociemba solution lengths')

    # Benchmark arguments
    parser.add_argument('--tests', type=int, default=10,
                        help='Number of test cases for benchmark (default: 10)')
    parser.add_argument('--scramble_moves', type=int, default=5,
                        help='Number of scramble moves for benchmark (default: 5)')
    parser.add_argument('--output', type=str, default=None,
                        help='Write benchmark results as JSON lines to this file')

    # Search limits
    parser.add_argument('--iddfs_time_limit', type=float, default=IDDFS_TIME_LIMIT,
                        help=f'Seconds per iterative-deepening depth (default: {IDDFS_TIME_LIMIT})')
    parser.add_argument('--visited_limit', type=int, default=VISITED_LIMIT,
                        help=f'Maximum states remembered per search (default: {VISITED_LIMIT})')
    parser.add_argument('--max_solution_length', type=int, default=MAX_SOLUTION_LENGTH,
                        help=f'Cap on fallback solution length (default: {MAX_SOLUTION_LENGTH})')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for scrambles and fallback perturbations')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the result')
    return parser


def print_solution(result):
    if result["success"]:
        print(f"\n{result['message']} (strategy: {result['strategy']})")
    else:
        print(f"\nFailed: {result['message']}")

    if result["moves"]:
        print(f"Solution: {' '.join(result['moves'])}")
        for i, move in enumerate(result["moves"]):
            print(f"Step {i+1}/{len(result['moves'])}: {move} - {describe(move)}")


def main(argv=None):
    args = build_parser().parse_args(argv)

    solver = CubeSolver(
        iddfs_time_limit=args.iddfs_time_limit,
        visited_limit=args.visited_limit,
        max_solution_length=args.max_solution_length,
        seed=args.seed,
        verbose=not args.quiet,
    )

    try:
        if args.describe:
            for move in MOVES:
                print(f"{move:3} {describe(move)}")
            return 0

        if args.benchmark:
            run_benchmark(
                num_tests=args.tests,
                scramble_moves=args.scramble_moves,
                seed=args.seed,
                output_file=args.output,
                solver=solver,
                verbose=not args.quiet,
            )
            return 0

        if args.facelets:
            with open(args.facelets, 'r') as f:
                config = import_config(f.read())
        else:
            if args.random is not None:
                scramble_moves = generate_scramble(args.random, random.Random(args.seed))
            else:
                scramble_moves = args.scramble.split()
            print(f"Applying scramble: {' '.join(scramble_moves)}")
            config = decode(apply_algorithm(solved_state(), scramble_moves))

        if not args.quiet:
            print("Cube state:")
            print(format_state(encode(config)))

        result = solver.solve(config)
        print_solution(result)
        return 0 if result["success"] else 1

    except (ValidationError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1
