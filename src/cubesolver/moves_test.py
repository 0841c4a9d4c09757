import random
import unittest

import kociemba as koc
import numpy as np

from cubesolver.cube import generate_scramble, is_solved, solved_state, to_kociemba_string
from cubesolver.moves import (
    FACE_OFFSET, IDENTITY, MOVE_TABLE, MOVES, apply_algorithm, apply_move, build_face_move,
    compose, invert_algorithm,
)

BASE_MOVES = ["U", "D", "F", "B", "R", "L"]


def random_state(seed):
    rng = random.Random(seed)
    return apply_algorithm(solved_state(), generate_scramble(25, rng))


class TestMoveTable(unittest.TestCase):

    def test_all_moves_present(self):
        self.assertEqual(sorted(MOVE_TABLE), sorted(MOVES))
        self.assertEqual(len(MOVE_TABLE), 18)

    def test_every_move_is_a_bijection(self):
        for move, transform in MOVE_TABLE.items():
            self.assertEqual(sorted(transform.tolist()), list(range(54)), move)

    def test_quarter_turns_have_order_four(self):
        for move in BASE_MOVES:
            transform = MOVE_TABLE[move]
            self.assertTrue(np.array_equal(compose(transform, compose(transform, compose(transform, transform))), IDENTITY), move)

    def test_derived_moves(self):
        for move in BASE_MOVES:
            quarter = MOVE_TABLE[move]
            self.assertTrue(np.array_equal(MOVE_TABLE[move + "2"], compose(quarter, quarter)))
            self.assertTrue(np.array_equal(compose(quarter, MOVE_TABLE[move + "'"]), IDENTITY))

    def test_centers_never_move(self):
        for move, transform in MOVE_TABLE.items():
            for offset in FACE_OFFSET.values():
                self.assertEqual(transform[offset + 4], offset + 4, move)

    def test_opposite_faces_touch_disjoint_cells(self):
        for a, b in [("U", "D"), ("F", "B"), ("R", "L")]:
            moved_a = set(np.nonzero(build_face_move(a) != IDENTITY)[0])
            moved_b = set(np.nonzero(build_face_move(b) != IDENTITY)[0])
            self.assertFalse(moved_a & moved_b, f"{a}/{b}")

    def test_table_is_read_only(self):
        with self.assertRaises(ValueError):
            MOVE_TABLE["U"][0] = 0

    def test_order_four_on_scrambled_states(self):
        state = random_state(1)
        for move in BASE_MOVES:
            result = state
            for _ in range(4):
                result = apply_move(result, move)
            self.assertTrue(np.array_equal(result, state), move)
            self.assertTrue(np.array_equal(apply_move(apply_move(state, move), move + "'"), state), move)

    def test_single_move_unsolves(self):
        for move in MOVES:
            self.assertFalse(is_solved(apply_move(solved_state(), move)), move)

    def test_invert_algorithm(self):
        self.assertEqual(invert_algorithm("R U2 F'"), ["F", "U2", "R'"])
        state = random_state(2)
        scramble = "R U R' U' F2 L D' B"
        self.assertTrue(np.array_equal(apply_algorithm(apply_algorithm(state, scramble), invert_algorithm(scramble)), state))

    def test_invalid_move(self):
        with self.assertRaises(ValueError):
            apply_algorithm(solved_state(), "R X")

    def test_matches_kociemba(self):
        """A Kociemba solution replayed through the move table must solve the cube."""
        for seed in range(3):
            state = random_state(seed)
            solution = koc.solve(to_kociemba_string(state))
            self.assertTrue(is_solved(apply_algorithm(state, solution)), solution)

        # Sexy move 6 times is the identity
        state = apply_algorithm(solved_state(), "R U R' U' " * 6)
        self.assertTrue(is_solved(state))


if __name__ == "__main__":
    unittest.main()
