import random
import unittest

from cubesolver.cube import (
    COLORS, POSITIONS, cube_stats, decode, describe, encode, export_config, format_state,
    generate_scramble, import_config, is_solved, scramble, solved_config, solved_state,
    to_kociemba_string, validate,
)
from cubesolver.exceptions import CenterMismatchError, ColorCountError, ValidationError
from cubesolver.moves import apply_algorithm


class TestCodec(unittest.TestCase):

    def test_solved_state(self):
        state = solved_state()
        self.assertEqual(len(state), 54)
        self.assertTrue(is_solved(state))
        self.assertEqual(state.tolist(), [i // 9 for i in range(54)])

    def test_round_trip(self):
        config = scramble(20, random.Random(7))
        self.assertEqual(decode(encode(config)), config)

    def test_missing_position_defaults_to_white(self):
        config = solved_config()
        del config["F1"]
        self.assertEqual(decode(encode(config))["F1"], "white")

    def test_unknown_color(self):
        config = solved_config()
        config["F1"] = "purple"
        with self.assertRaises(ValueError):
            encode(config)

    def test_face_uniform_counts_as_solved(self):
        # Swap the colors of two whole faces: every face is still uniform
        config = solved_config()
        for i in range(1, 10):
            if i != 5:
                config[f"U{i}"], config[f"D{i}"] = "yellow", "white"
        config["U5"], config["D5"] = "yellow", "white"
        self.assertTrue(is_solved(encode(config)))

    def test_kociemba_string(self):
        self.assertEqual(
            to_kociemba_string(solved_state()),
            "UUUUUUUUURRRRRRRRRFFFFFFFFFDDDDDDDDDLLLLLLLLLBBBBBBBBB",
        )
        # After U the front top row shows the right face color
        state = apply_algorithm(solved_state(), "U")
        self.assertEqual(to_kociemba_string(state)[18:21], "RRR")

    def test_format_state(self):
        lines = format_state(solved_state()).splitlines()
        self.assertEqual(len(lines), 9)
        self.assertEqual(lines[0].split(), ["W", "W", "W"])
        self.assertEqual(lines[3].split(), ["G"] * 3 + ["R"] * 3 + ["B"] * 3 + ["O"] * 3)


class TestValidate(unittest.TestCase):

    def test_solved_is_valid(self):
        validate(solved_config())

    def test_color_count(self):
        config = solved_config()
        config["F1"] = "white"
        with self.assertRaises(ColorCountError) as ctx:
            validate(config)
        self.assertEqual(ctx.exception.color, "white")
        self.assertEqual(ctx.exception.count, 10)
        self.assertIn("white", str(ctx.exception))
        self.assertIn("10", str(ctx.exception))

    def test_center_mismatch(self):
        config = solved_config()
        config["U5"] = "red"
        with self.assertRaises(CenterMismatchError) as ctx:
            validate(config)
        self.assertEqual(ctx.exception.position, "U5")
        self.assertIn("U5", str(ctx.exception))

    def test_center_mismatch_with_valid_counts(self):
        config = solved_config()
        config["U5"], config["F1"] = "red", "white"
        with self.assertRaises(CenterMismatchError) as ctx:
            validate(config)
        self.assertEqual(ctx.exception.expected, "white")
        self.assertEqual(ctx.exception.actual, "red")

    def test_validation_errors_share_a_base(self):
        self.assertTrue(issubclass(ColorCountError, ValidationError))
        self.assertTrue(issubclass(CenterMismatchError, ValidationError))

    def test_scrambled_is_valid(self):
        validate(scramble(30, random.Random(3)))

    def test_cube_stats(self):
        stats = cube_stats(solved_config())
        self.assertTrue(stats["is_valid"])
        self.assertTrue(stats["is_solved"])
        self.assertEqual(stats["color_distribution"], {color: 9 for color in COLORS})

        config = solved_config()
        config["F1"] = "white"
        stats = cube_stats(config)
        self.assertFalse(stats["is_valid"])
        self.assertFalse(stats["is_solved"])
        self.assertIn("white", stats["validation_message"])


class TestScramble(unittest.TestCase):

    def test_no_consecutive_same_face(self):
        moves = generate_scramble(20)
        self.assertEqual(len(moves), 20)
        for a, b in zip(moves, moves[1:]):
            self.assertNotEqual(a[0], b[0])

    def test_seeded_scramble_is_reproducible(self):
        self.assertEqual(generate_scramble(20, random.Random(5)), generate_scramble(20, random.Random(5)))

    def test_scramble_returns_full_configuration(self):
        config = scramble()
        self.assertEqual(sorted(config), sorted(POSITIONS))
        self.assertFalse(is_solved(encode(config)))

    def test_describe(self):
        self.assertEqual(describe("U"), "Turn the Up face clockwise 90°")
        self.assertEqual(describe("R'"), "Turn the Right face counterclockwise 90°")
        self.assertEqual(describe("M"), "Perform move M")

    def test_export_import(self):
        config = scramble(10, random.Random(11))
        self.assertEqual(import_config(export_config(config)), config)
        with self.assertRaises(ValueError):
            import_config("[1, 2, 3]")


if __name__ == "__main__":
    unittest.main()
