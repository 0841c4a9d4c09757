"""
Known move sequences replayed by the fallback stages of the solver.

PHASES lists the beginner-method steps in solving order; each step offers a
few candidate sequences that are tried one after the other.
FALLBACK_ALGORITHMS is replayed in order by the last-resort loop.
"""

# Define macro-operators for solving specific patterns
PHASES = [
    ("cross", {
        "sledgehammer_insert": ["F", "R", "U'", "R'", "U'", "R", "U", "R'", "F'"],
        "edge_flip": ["R", "U'", "R'", "F", "R", "F'"],
        "wide_flip": ["F", "U", "R", "U'", "R'", "F'"],
        "sexy_and_back": ["R", "U", "R'", "U'", "R", "U", "R'"],
    }),
    ("first_layer_corners", {
        "corner_insert": ["R", "U'", "R'", "U'", "R", "U", "R'", "U"],
        "corner_twist": ["F", "R", "U'", "R'", "F'"],
        "sexy_and_back": ["R", "U", "R'", "U'", "R", "U", "R'"],
        "front_sexy": ["F", "U", "F'", "U'", "F", "U", "F'"],
    }),
    ("second_layer", {
        "right_insert": ["U", "R", "U'", "R'", "U'", "F'", "U", "F"],
        "left_insert": ["U'", "L'", "U", "L", "U", "F", "U'", "F'"],
        "right_edge_cycle": ["R", "U'", "R'", "U'", "R", "U", "R'", "U", "R", "U'", "R'"],
        "front_edge_cycle": ["F", "U", "F'", "U", "F", "U'", "F'", "U'", "F", "U", "F'"],
    }),
    ("last_layer_cross", {
        "line_to_cross": ["F", "R", "U", "R'", "U'", "F'"],
        "hook_to_cross": ["F", "U", "R", "U'", "R'", "F'"],
        "sune": ["R", "U", "R'", "U", "R", "U2", "R'"],
    }),
    ("last_layer_corners", {
        "sune": ["R", "U", "R'", "U", "R", "U2", "R'"],
        "antisune": ["R", "U2", "R'", "U'", "R", "U'", "R'"],
        "left_sune": ["L'", "U'", "L", "U'", "L'", "U2", "L"],
    }),
    ("final_permutation", {
        "t_perm": ["R", "U", "R'", "F'", "R", "U", "R'", "U'", "R'", "F", "R2", "U'", "R'"],
        "a_perm": ["R'", "F", "R'", "B2", "R", "F'", "R'", "B2", "R2"],
        "u_perm": ["R2", "U", "R", "U", "R'", "U'", "R'", "U'", "R'", "U", "R'"],
        "a_perm_mirror": ["R", "U'", "R", "F2", "R'", "U", "R", "F2", "R2"],
    }),
]

FALLBACK_ALGORITHMS = {
    "corner_3cycle": ["R", "U", "R'", "U'"],
    "t_perm": ["R", "U", "R'", "F'", "R", "U", "R'", "U'", "R'", "F", "R2", "U'", "R'"],
    "antisune": ["R", "U2", "R'", "U'", "R", "U'", "R'"],
    "sune": ["R", "U", "R'", "U", "R", "U2", "R'"],
    "sledgehammer": ["F", "R", "U'", "R'", "U'", "R", "U", "R'", "F'"],
    "y_perm": ["R'", "F", "R'", "B2", "R", "F'", "R'", "B2", "R2"],
}

# Single moves used to knock the fallback loop out of a cycle
PERTURBATION_MOVES = ["U", "R", "F"]
