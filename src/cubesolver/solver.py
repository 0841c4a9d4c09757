import random
import time
from collections import deque
from functools import lru_cache, partial

from cubesolver import algorithms
from cubesolver.cube import count_solved_stickers, encode, is_solved, validate
from cubesolver.exceptions import ValidationError
from cubesolver.moves import MOVE_TABLE, MOVES, OPPOSITE_FACES, apply_algorithm

# Breadth-first passes: (max depth, time limit in seconds, max states explored)
BFS_PASSES = [
    (8, 6.0, 300000),
    (12, 10.0, 500000),
]

# Depth ceilings tried by iterative deepening, each with its own time limit
IDDFS_DEPTHS = range(15, 26, 2)
IDDFS_TIME_LIMIT = 8.0

# Near the depth ceiling only the best few moves are expanded
NARROW_PLIES = 3
NARROW_WIDTH = 6

# Upper bound on remembered states (and pending DFS nodes) per search
VISITED_LIMIT = 1000000

PHASE_MOVE_LIMIT = 15
PROGRESS_THRESHOLD = 0.3

FALLBACK_MAX_ATTEMPTS = 50
FALLBACK_PERTURB_EVERY = 10
MAX_SOLUTION_LENGTH = 200

FACE_PRIORITY = ["R", "U", "F", "L", "D", "B"]


def _turn_priority(move):
    if len(move) == 1:
        return 0
    return 1 if move.endswith("2") else 2


@lru_cache(maxsize=None)
def _ordered_moves(last_face, second_last_face):
    valid_moves = []
    for move in MOVES:
        face = move[0]
        # Don't repeat same face consecutively
        if face == last_face:
            continue
        # Don't turn the opposite face right after
        if last_face and face == OPPOSITE_FACES[last_face]:
            continue
        # Avoid going back and forth between opposite faces (already
        # excluded by the two checks above, kept for the full pruning rule)
        if second_last_face and OPPOSITE_FACES[face] == last_face == second_last_face:
            continue
        valid_moves.append(move)

    return tuple(sorted(valid_moves, key=lambda m: (FACE_PRIORITY.index(m[0]), _turn_priority(m))))


def order_moves(moves):
    """
    Candidate moves after the sequence ``moves``, most promising first.

    Redundant moves are filtered out, the rest are sorted by face priority
    (R, U, F, L, D, B) and then single, double, counterclockwise.
    """
    last_face = moves[-1][0] if moves else ""
    second_last_face = moves[-2][0] if len(moves) >= 2 else ""
    return _ordered_moves(last_face, second_last_face)


class CubeSolver:
    """
    Layered solver that falls back to slower strategies when the fast ones fail.

    Strategies are tried in order:
    1. Breadth-first search with increasing depth ceilings
    2. Layer-by-layer replay of known algorithms
    3. Iterative-deepening depth-first search
    4. Repeated fallback algorithms, which always produce a sequence

    Every strategy is bounded by time, state-count or length limits, so a
    solve always terminates.
    """

    def __init__(self, bfs_passes=None, iddfs_depths=None, iddfs_time_limit=IDDFS_TIME_LIMIT,
                 visited_limit=VISITED_LIMIT, phase_move_limit=PHASE_MOVE_LIMIT,
                 progress_threshold=PROGRESS_THRESHOLD, fallback_max_attempts=FALLBACK_MAX_ATTEMPTS,
                 fallback_perturb_every=FALLBACK_PERTURB_EVERY, max_solution_length=MAX_SOLUTION_LENGTH,
                 rng=None, seed=None, verbose=False):
        """
        Initialize the solver with its search limits.

        Args:
            bfs_passes: List of (max_depth, time_limit, max_states) breadth-first passes
            iddfs_depths: Depth ceilings for iterative deepening
            iddfs_time_limit: Seconds allowed per iterative-deepening depth
            visited_limit: Maximum number of states remembered by one search
            phase_move_limit: Maximum moves tried for one layer-by-layer phase
            progress_threshold: Fraction of stickers a phase must fix to be accepted
            fallback_max_attempts: Passes through the fallback algorithms
            fallback_perturb_every: Passes between two random perturbation moves
            max_solution_length: Cap on the fallback sequence length
            rng: ``random.Random`` used for perturbation moves
            seed: Seed for a new ``random.Random`` when ``rng`` is not given
            verbose: Whether to print progress messages
        """
        self.bfs_passes = list(bfs_passes if bfs_passes is not None else BFS_PASSES)
        self.iddfs_depths = list(iddfs_depths if iddfs_depths is not None else IDDFS_DEPTHS)
        self.iddfs_time_limit = iddfs_time_limit
        self.visited_limit = visited_limit
        self.phase_move_limit = phase_move_limit
        self.progress_threshold = progress_threshold
        self.fallback_max_attempts = fallback_max_attempts
        self.fallback_perturb_every = fallback_perturb_every
        self.max_solution_length = max_solution_length
        self.rng = rng if rng is not None else random.Random(seed)
        self.verbose = verbose

    def _log(self, message):
        if self.verbose:
            print(message)

    @staticmethod
    def _result(success, moves, message, strategy):
        return {"success": success, "moves": list(moves), "message": message, "strategy": strategy}

    def solve(self, config, progress=None):
        """
        Solve a cube given as a facelet configuration.

        Args:
            config: Mapping of the 54 position names ("U1" ... "D9") to color names
            progress: Optional callable receiving a message as each strategy starts

        Returns:
            dict: success (bool), moves (list), message (str), strategy (str)
        """
        try:
            validate(config)
        except ValidationError as e:
            self._log(f"Invalid cube: {e}")
            return self._result(False, [], str(e), "invalid")

        return self.solve_state(encode(config), progress)

    def solve_state(self, state, progress=None):
        """Run the strategy cascade on an already validated state."""
        if is_solved(state):
            return self._result(True, [], "Cube is already solved!", "none")

        strategies = []
        for idx, (depth, time_limit, max_states) in enumerate(self.bfs_passes):
            label = "Optimal solution" if idx == 0 else "Solution"
            strategies.append((
                f"breadth-first search to depth {depth}",
                partial(self.breadth_first_search, max_depth=depth, time_limit=time_limit, max_states=max_states),
                label,
                f"bfs-{depth}",
            ))
        strategies.append(("layer-by-layer", self.systematic_solve, "Complex solution", "layer-by-layer"))
        strategies.append(("iterative deepening", self.iterative_deepening, "Complex solution", "iddfs"))

        for name, strategy_fn, label, strategy in strategies:
            self._log(f"Trying {name} approach...")
            if progress is not None:
                progress(f"Trying {name}...")

            moves = strategy_fn(state)
            if moves is not None:
                self._log(f"Cube solved using {name} approach in {len(moves)} moves.")
                return self._result(True, moves, f"{label} found in {len(moves)} moves!", strategy)

        self._log("Using guaranteed fallback algorithm")
        if progress is not None:
            progress("Trying fallback algorithms...")
        moves = self.guaranteed_solve(state)

        if is_solved(apply_algorithm(state, moves)):
            return self._result(True, moves, f"Complex solution found in {len(moves)} moves!", "fallback")
        return self._result(
            False, moves,
            f"Best-effort sequence of {len(moves)} moves did not reach the solved state",
            "fallback",
        )

    def breadth_first_search(self, state, max_depth=8, time_limit=6.0, max_states=300000):
        """
        Breadth-first search up to ``max_depth`` moves.

        Returns:
            list: the first solving sequence found, or None when the search
            runs out of depth, time or states
        """
        if is_solved(state):
            return []

        start_time = time.time()
        queue = deque([(state, [])])
        visited = {state.tobytes(): 0}
        states_explored = 0

        while queue:
            if time.time() - start_time > time_limit:
                self._log(f"BFS timeout at depth {max_depth}, explored {states_explored} states")
                return None
            if states_explored >= max_states or len(visited) >= self.visited_limit:
                self._log(f"BFS state limit reached at depth {max_depth}, explored {states_explored} states")
                return None

            current, moves = queue.popleft()
            states_explored += 1

            if len(moves) >= max_depth:
                continue

            depth = len(moves) + 1
            for move in order_moves(moves):
                new_state = current[MOVE_TABLE[move]]
                key = new_state.tobytes()

                # Only revisit a state if it is now reached in fewer moves
                seen_depth = visited.get(key)
                if seen_depth is not None and seen_depth <= depth:
                    continue
                visited[key] = depth

                new_moves = moves + [move]
                if is_solved(new_state):
                    self._log(f"BFS found solution in {len(new_moves)} moves")
                    return new_moves

                if depth < max_depth:
                    queue.append((new_state, new_moves))

        self._log(f"BFS failed at depth {max_depth}, explored {states_explored} states")
        return None

    def systematic_solve(self, state):
        """
        Work through the layer-by-layer phases with known algorithms.

        Each phase starts from the state left by the previous one.

        Returns:
            list: the accumulated moves if they solve the cube, otherwise None
        """
        current = state
        all_moves = []

        for phase_name, sequences in algorithms.PHASES:
            step_moves = self._solve_with_sequences(current, sequences)
            if not step_moves:
                self._log(f"Phase {phase_name}: no progress")
                continue

            all_moves.extend(step_moves)
            current = apply_algorithm(current, step_moves)
            self._log(f"Phase {phase_name}: applied {len(step_moves)} moves")

            if is_solved(current):
                self._log(f"Systematic solve completed in {len(all_moves)} moves")
                return all_moves

        return None

    def _solve_with_sequences(self, state, sequences):
        """Repeat each candidate sequence until it makes enough progress."""
        initial_score = count_solved_stickers(state)

        for algorithm in sequences.values():
            test_state = state
            moves = []

            for _ in range(self.phase_move_limit):
                if len(moves) >= self.phase_move_limit:
                    break
                test_state = apply_algorithm(test_state, algorithm)
                moves.extend(algorithm)

                progress = (count_solved_stickers(test_state) - initial_score) / 54
                if is_solved(test_state) or progress > self.progress_threshold:
                    return moves

        return []

    def iterative_deepening(self, state):
        """Depth-limited searches at increasing depth ceilings."""
        for depth in self.iddfs_depths:
            self._log(f"Trying iterative deepening at depth {depth}")
            moves = self.depth_limited_search(state, depth, self.iddfs_time_limit)
            if moves is not None:
                self._log(f"Iterative deepening found solution in {len(moves)} moves")
                return moves
        return None

    def depth_limited_search(self, state, max_depth, time_limit):
        """
        Depth-first search down to ``max_depth`` moves.

        A state is expanded at most once per call. Close to the depth ceiling
        only the top ordered moves are tried.
        """
        start_time = time.time()
        stack = [(state, [])]
        visited = set()
        nodes_explored = 0

        while stack:
            if time.time() - start_time > time_limit:
                break
            if len(visited) >= self.visited_limit or len(stack) >= self.visited_limit:
                break

            current, moves = stack.pop()
            nodes_explored += 1

            key = current.tobytes()
            if key in visited:
                continue
            visited.add(key)

            if is_solved(current):
                self._log(f"Depth-limited search found solution at depth {len(moves)}, explored {nodes_explored} nodes")
                return moves

            depth = len(moves)
            if depth < max_depth:
                ordered = order_moves(moves)
                if depth > max_depth - NARROW_PLIES:
                    ordered = ordered[:NARROW_WIDTH]

                # Push in reverse so the best move is popped first
                for move in reversed(ordered):
                    stack.append((current[MOVE_TABLE[move]], moves + [move]))

        self._log(f"Depth-limited search failed at depth {max_depth}, explored {nodes_explored} nodes")
        return None

    def guaranteed_solve(self, state):
        """
        Replay the fallback algorithms until the cube is solved or a limit is hit.

        After every few passes a random single move is applied to break
        cycles. The result is never longer than ``max_solution_length`` and is
        not guaranteed to solve the cube.

        One pass through the fallback algorithms is 49 moves, so with the
        default caps (200 moves) the loop stops during the fifth pass, before
        the first perturbation. Raise ``max_solution_length`` to get the
        perturbation moves.
        """
        current = state
        solution = []
        attempts = 0
        exhausted = False

        while not is_solved(current) and attempts < self.fallback_max_attempts and not exhausted:
            attempts += 1

            for algorithm in algorithms.FALLBACK_ALGORITHMS.values():
                if len(solution) + len(algorithm) > self.max_solution_length:
                    exhausted = True
                    break

                current = apply_algorithm(current, algorithm)
                solution.extend(algorithm)

                if is_solved(current):
                    self._log(f"Guaranteed solution completed in {len(solution)} moves after {attempts} attempts")
                    return solution

            # Add some randomness to break cycles
            if not exhausted and attempts % self.fallback_perturb_every == 0:
                if len(solution) >= self.max_solution_length:
                    break
                move = self.rng.choice(algorithms.PERTURBATION_MOVES)
                current = current[MOVE_TABLE[move]]
                solution.append(move)

        self._log(f"Guaranteed solution result: {len(solution)} moves, solved: {is_solved(current)}")
        return solution


def solve(config, progress=None, **kwargs):
    """Solve ``config`` with a new ``CubeSolver`` built from ``kwargs``."""
    return CubeSolver(**kwargs).solve(config, progress=progress)
