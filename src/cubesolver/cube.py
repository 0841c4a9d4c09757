"""
Facelet configurations and the flat state used by the search.

A configuration maps the 54 position names to color names. Each face is a
3x3 grid of stickers numbered 1 to 9 in reading order:
1 2 3
4 5 6
7 8 9

Position 5 of every face is the center and fixes the color of that face:
U: white, F: red, R: blue, B: orange, L: green, D: yellow
"""

import json
import random
from collections import Counter

import numpy as np

from cubesolver.exceptions import CenterMismatchError, ColorCountError, ValidationError
from cubesolver.moves import FACES, MOVES, apply_algorithm


COLORS = ["white", "red", "blue", "orange", "green", "yellow"]
COLOR_TO_NUM = {color: idx for idx, color in enumerate(COLORS)}

# Face k of the state carries color k when solved
FACE_COLORS = dict(zip(FACES, COLORS))

POSITIONS = [face + str(i) for face in FACES for i in range(1, 10)]
CENTER_POSITIONS = [face + "5" for face in FACES]

DEFAULT_COLOR = "white"

MOVE_DESCRIPTIONS = {
    "U": "Turn the Up face clockwise 90°",
    "U2": "Turn the Up face 180°",
    "U'": "Turn the Up face counterclockwise 90°",
    "D": "Turn the Down face clockwise 90°",
    "D2": "Turn the Down face 180°",
    "D'": "Turn the Down face counterclockwise 90°",
    "F": "Turn the Front face clockwise 90°",
    "F2": "Turn the Front face 180°",
    "F'": "Turn the Front face counterclockwise 90°",
    "B": "Turn the Back face clockwise 90°",
    "B2": "Turn the Back face 180°",
    "B'": "Turn the Back face counterclockwise 90°",
    "R": "Turn the Right face clockwise 90°",
    "R2": "Turn the Right face 180°",
    "R'": "Turn the Right face counterclockwise 90°",
    "L": "Turn the Left face clockwise 90°",
    "L2": "Turn the Left face 180°",
    "L'": "Turn the Left face counterclockwise 90°",
}


def solved_config():
    """Return the facelet configuration of a solved cube."""
    return {pos: FACE_COLORS[pos[0]] for pos in POSITIONS}


def solved_state():
    return encode(solved_config())


def encode(config):
    """
    Convert a facelet configuration to a state array.

    Missing positions are filled with the default color; unknown color
    names are rejected.
    """
    state = []
    for pos in POSITIONS:
        color = config.get(pos, DEFAULT_COLOR)
        if color not in COLOR_TO_NUM:
            raise ValueError(f"Unknown color '{color}' at {pos}. Allowed colors: {COLORS}.")
        state.append(COLOR_TO_NUM[color])
    return np.array(state, dtype=np.uint8)


def decode(state):
    """Convert a state array back to a facelet configuration."""
    return {pos: COLORS[int(value)] for pos, value in zip(POSITIONS, state)}


def validate(config):
    """
    Check that a configuration could come from a real cube.

    The center of each face must carry that face's color, and each color
    must appear exactly 9 times.

    Raises:
        CenterMismatchError: a center sticker has the wrong color
        ColorCountError: a color does not appear exactly 9 times
    """
    for pos in CENTER_POSITIONS:
        expected = FACE_COLORS[pos[0]]
        actual = config.get(pos)
        if actual != expected:
            raise CenterMismatchError(pos, expected, actual)

    counts = Counter(config.values())
    for color in COLORS:
        if counts[color] != 9:
            raise ColorCountError(color, counts[color])


def is_solved(state):
    """Check if every face shows a single color."""
    faces = np.asarray(state).reshape(6, 9)
    return bool(np.all(faces == faces[:, 4:5]))


def count_solved_stickers(state):
    """Count the stickers that match the center of their face."""
    faces = np.asarray(state).reshape(6, 9)
    return int(np.sum(faces == faces[:, 4:5]))


def to_kociemba_string(state):
    """
    Convert a state to Kociemba string notation.

    Kociemba uses the following conventions:
    - Each sticker is named after the face whose center has its color
    - The order of faces is: Up, Right, Front, Down, Left, Back
    - Each face is read from top-left to bottom-right

    Returns:
        str: A 54-character string representing the cube state
    """
    faces = np.asarray(state).reshape(6, 9)

    # Map each color to the face whose center carries it
    color_map = {int(faces[idx][4]): face for idx, face in enumerate(FACES)}

    kociemba_face_order = ["U", "R", "F", "D", "L", "B"]
    kociemba_str = ""
    for face in kociemba_face_order:
        for value in faces[FACES.index(face)]:
            kociemba_str += color_map[int(value)]
    return kociemba_str


def format_state(state):
    """Return the state as an unfolded net, one color initial per sticker."""
    faces = [[COLORS[int(v)][0].upper() for v in face] for face in np.asarray(state).reshape(6, 9)]
    up, front, right, back, left, down = faces
    result = []

    for i in range(0, 9, 3):
        result.append("      " + " ".join(up[i:i+3]))

    # Left, Front, Right, Back faces side by side
    for i in range(0, 9, 3):
        row = [" ".join(face[i:i+3]) for face in (left, front, right, back)]
        result.append(" ".join(row))

    for i in range(0, 9, 3):
        result.append("      " + " ".join(down[i:i+3]))

    return "\n".join(result)


def describe(move):
    """Human-readable instruction for a single move."""
    return MOVE_DESCRIPTIONS.get(move, f"Perform move {move}")


def generate_scramble(num_moves=15, rng=None):
    """
    Generate a random scramble.

    Two consecutive moves never turn the same face.

    Args:
        num_moves: Number of moves in the scramble
        rng: Optional ``random.Random`` for reproducible scrambles

    Returns:
        list: The scramble moves
    """
    rng = rng or random.Random()
    scramble_moves = []
    last_face = ""

    for _ in range(num_moves):
        move = rng.choice(MOVES)
        while move[0] == last_face:
            move = rng.choice(MOVES)
        scramble_moves.append(move)
        last_face = move[0]

    return scramble_moves


def scramble(num_moves=20, rng=None):
    """Return the configuration of a solved cube after a random scramble."""
    state = apply_algorithm(solved_state(), generate_scramble(num_moves, rng))
    return decode(state)


def cube_stats(config):
    """
    Summarize a configuration.

    Returns:
        dict: is_valid, is_solved, color_distribution and a validation message
    """
    try:
        validate(config)
        message = "Cube configuration is valid"
        is_valid = True
    except ValidationError as e:
        message = str(e)
        is_valid = False

    return {
        "is_valid": is_valid,
        "is_solved": is_valid and is_solved(encode(config)),
        "color_distribution": dict(Counter(config.values())),
        "validation_message": message,
    }


def export_config(config):
    """Serialize a configuration as indented JSON."""
    return json.dumps(config, indent=2)


def import_config(data):
    """
    Load a configuration from a JSON string or a mapping.

    Raises:
        ValueError: the data is not a JSON object of position -> color
    """
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise ValueError("Cube configuration must be a JSON object of position -> color")
    return dict(data)
