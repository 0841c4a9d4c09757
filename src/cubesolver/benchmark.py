import json
import os
import random
import time

import kociemba as koc

from cubesolver.cube import decode, generate_scramble, is_solved, solved_state, to_kociemba_string
from cubesolver.moves import apply_algorithm
from cubesolver.solver import CubeSolver


def reference_length(state):
    """
    Length of the Kociemba two-phase solution for ``state``.

    Returns:
        int: number of moves, or None if Kociemba rejects the state
    """
    if is_solved(state):
        return 0
    try:
        return len(koc.solve(to_kociemba_string(state)).split())
    except ValueError:
        return None


def generate_scrambles(num_scrambles, scramble_moves, seed=None):
    """
    Generate scrambles together with their Kociemba reference lengths.

    Returns:
        list: dicts with scramble, kociemba_string and reference_length
    """
    rng = random.Random(seed)
    scrambles = []
    for _ in range(num_scrambles):
        moves = generate_scramble(scramble_moves, rng)
        state = apply_algorithm(solved_state(), moves)
        scrambles.append({
            "scramble": " ".join(moves),
            "kociemba_string": to_kociemba_string(state),
            "reference_length": reference_length(state),
        })
    return scrambles


def run_benchmark(num_tests=10, scramble_moves=5, seed=None, output_file=None, solver=None, verbose=True):
    """
    Solve random scrambles and compare against Kociemba's solution lengths.

    Args:
        num_tests: Number of scrambles to solve
        scramble_moves: Number of moves in each scramble
        seed: Seed for the scramble generator
        output_file: Optional path of a JSON-lines report, one line per scramble
        solver: ``CubeSolver`` to benchmark (default: a new one with default limits)
        verbose: Whether to print progress and the final summary

    Returns:
        dict: summary statistics
    """
    solver = solver or CubeSolver()
    scrambles = generate_scrambles(num_tests, scramble_moves, seed)

    records = []
    solved = 0
    total_moves = 0
    total_reference = 0
    reference_count = 0
    strategies_used = {}
    start_time = time.time()

    for i, scramble_data in enumerate(scrambles):
        state = apply_algorithm(solved_state(), scramble_data["scramble"])
        result = solver.solve(decode(state))

        # Replay the moves rather than trusting the reported flag
        verified = is_solved(apply_algorithm(state, result["moves"]))
        if verified:
            solved += 1
            total_moves += len(result["moves"])
            strategies_used[result["strategy"]] = strategies_used.get(result["strategy"], 0) + 1
            if scramble_data["reference_length"] is not None:
                total_reference += scramble_data["reference_length"]
                reference_count += 1

        records.append(dict(
            scramble_data,
            solution=" ".join(result["moves"]),
            solution_length=len(result["moves"]),
            strategy=result["strategy"],
            solved=verified,
        ))

        if verbose:
            status = "solved" if verified else "FAILED"
            print(f"[{i+1}/{num_tests}] {scramble_data['scramble']} -> {status} "
                  f"in {len(result['moves'])} moves ({result['strategy']})")

    summary = {
        "num_tests": num_tests,
        "scramble_moves": scramble_moves,
        "solved": solved,
        "success_rate": (solved / num_tests) * 100 if num_tests else 0.0,
        "avg_moves": total_moves / solved if solved else 0.0,
        "avg_reference_moves": total_reference / reference_count if reference_count else 0.0,
        "strategies_used": strategies_used,
        "time_taken": time.time() - start_time,
    }

    if output_file:
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_file, "w") as f:
            for record in records:
                # Write as a single line JSON object
                f.write(json.dumps(record) + "\n")
        if verbose:
            print(f"Results saved to {output_file}")

    if verbose:
        print("\n=== Benchmark Results ===")
        print(f"Scramble Moves: {scramble_moves}")
        print(f"Number of Tests: {num_tests}")
        print(f"Success Rate: {summary['success_rate']:.2f}%")
        print(f"Average Solution Length: {summary['avg_moves']:.2f}")
        print(f"Average Kociemba Length: {summary['avg_reference_moves']:.2f}")
        print(f"Time Taken: {summary['time_taken']:.2f} seconds")
        if strategies_used:
            print("Successful strategies breakdown:")
            for strategy, count in strategies_used.items():
                print(f"- {strategy}: {count} cubes ({count / solved * 100:.2f}%)")

    return summary
