import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO

from cubesolver.cli import main


class TestCli(unittest.TestCase):

    def run_cli(self, *argv):
        out = StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_solve_scramble(self):
        code, output = self.run_cli("--scramble", "R U R'", "--quiet")
        self.assertEqual(code, 0)
        self.assertIn("Solution:", output)

    def test_describe(self):
        code, output = self.run_cli("--describe")
        self.assertEqual(code, 0)
        self.assertIn("Turn the Up face clockwise 90°", output)

    def test_invalid_scramble(self):
        code, output = self.run_cli("--scramble", "R Q", "--quiet")
        self.assertEqual(code, 1)
        self.assertIn("Invalid move notation: Q", output)

    def test_invalid_facelets(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "cube.json")
            with open(path, "w") as f:
                json.dump({"U5": "red"}, f)
            code, output = self.run_cli("--facelets", path, "--quiet")
        self.assertEqual(code, 1)
        self.assertIn("U5", output)


if __name__ == "__main__":
    unittest.main()
