import numpy as np

# Face order of the flat state: U(0-8), F(9-17), R(18-26), B(27-35), L(36-44), D(45-53)
FACES = ["U", "F", "R", "B", "L", "D"]
FACE_OFFSET = {face: idx * 9 for idx, face in enumerate(FACES)}

OPPOSITE_FACES = {
    'U': 'D', 'D': 'U',
    'F': 'B', 'B': 'F',
    'R': 'L', 'L': 'R'
}

# Define possible moves
MOVES = ["U", "U2", "U'", "D", "D2", "D'", "F", "F2", "F'", "B", "B2", "B'", "R", "R2", "R'", "L", "L2", "L'"]

IDENTITY = np.arange(54)

# Source cell for each destination cell of a clockwise face turn
_CLOCKWISE = [6, 3, 0, 7, 4, 1, 8, 5, 2]

# Sticker strips that cycle around each face on a clockwise turn.
# The stickers of strip k move onto strip k+1, element by element.
_ADJACENT_CYCLES = {
    # F top -> L top -> B top -> R top
    "U": [[9, 10, 11], [36, 37, 38], [27, 28, 29], [18, 19, 20]],
    # F bottom -> R bottom -> B bottom -> L bottom
    "D": [[15, 16, 17], [24, 25, 26], [33, 34, 35], [42, 43, 44]],
    # U bottom -> R left -> D top (reversed) -> L right (reversed)
    "F": [[6, 7, 8], [18, 21, 24], [47, 46, 45], [44, 41, 38]],
    # U top (reversed) -> L left -> D bottom -> R right (reversed)
    "B": [[2, 1, 0], [36, 39, 42], [51, 52, 53], [26, 23, 20]],
    # F right -> U right -> B left (reversed) -> D right
    "R": [[11, 14, 17], [2, 5, 8], [33, 30, 27], [47, 50, 53]],
    # U left -> F left -> D left -> B right (reversed)
    "L": [[0, 3, 6], [9, 12, 15], [45, 48, 51], [35, 32, 29]],
}


def compose(a, b):
    """Sequential application: apply ``b`` first, then ``a``."""
    return a[b]


def build_face_move(face):
    """Build the permutation for a clockwise quarter turn of ``face``."""
    transform = IDENTITY.copy()

    # Rotate the face itself clockwise
    offset = FACE_OFFSET[face]
    for i in range(9):
        transform[offset + i] = offset + _CLOCKWISE[i]

    # Cycle the touching stickers of the four neighbouring faces
    strips = _ADJACENT_CYCLES[face]
    for k in range(4):
        src = strips[k]
        dst = strips[(k + 1) % 4]
        for j in range(3):
            transform[dst[j]] = src[j]

    return transform


def build_move_table():
    """
    Build the transforms for all 18 moves.

    The six quarter turns are built directly; the half turns and the
    counterclockwise turns are derived by composing a quarter turn with itself.

    Returns:
        dict: move name -> read-only numpy index array
    """
    table = {}
    for face in ["U", "D", "F", "B", "R", "L"]:
        move = build_face_move(face)
        double = compose(move, move)
        table[face] = move
        table[face + "2"] = double
        table[face + "'"] = compose(double, move)

    for transform in table.values():
        transform.setflags(write=False)
    return table


MOVE_TABLE = build_move_table()


def apply_move(state, move):
    """Return a new state with ``move`` applied."""
    try:
        transform = MOVE_TABLE[move]
    except KeyError:
        raise ValueError(f"Invalid move notation: {move}")
    return state[transform]


def parse_algorithm(algorithm):
    """Normalize a notation string or a list of moves into a list of moves."""
    if algorithm is None:
        return []
    if isinstance(algorithm, str):
        return algorithm.split()
    return list(algorithm)


def apply_algorithm(state, algorithm):
    """
    Apply a sequence of moves.

    Examples:
    - "R U R'" applies R, then U, then R'
    - ["F2", "B2", "L'", "D"] applies F2, then B2, then L', then D
    """
    for move in parse_algorithm(algorithm):
        state = apply_move(state, move)
    return state


def invert_move(move):
    if move.endswith("'"):
        return move[0]
    if move.endswith("2"):
        return move
    return move + "'"


def invert_algorithm(algorithm):
    """Return the moves that undo ``algorithm``."""
    return [invert_move(move) for move in reversed(parse_algorithm(algorithm))]
