class ValidationError(ValueError):
    """Raised when a facelet configuration cannot describe a real cube."""


class ColorCountError(ValidationError):
    def __init__(self, color, count):
        self.color = color
        self.count = count
        super().__init__(f"Color {color} appears {count} times, expected 9")


class CenterMismatchError(ValidationError):
    def __init__(self, position, expected, actual):
        self.position = position
        self.expected = expected
        self.actual = actual
        super().__init__(f"Center piece {position} should be {expected}, got {actual}")
