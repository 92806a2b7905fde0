"""Wire protocol for the fan controller firmware.

Frames are plain ASCII: ``N,2#`` + decimal duty + ``;``.
"""

PREAMBLE = "N,2#"
TERMINATOR = ";"

MIN_DUTY = 0
MAX_DUTY = 100
PARK_DUTY = 50  # Written right before a clean shutdown


def encode(value) -> str:
    """
    Build the frame for a duty value.

    No range check is done here, callers validate with is_valid_duty() first.

    Args:
        value: Duty value (int or its decimal string)

    Returns:
        Frame string, e.g. "N,2#50;"
    """
    return f"{PREAMBLE}{value}{TERMINATOR}"


def is_valid_duty(value: int) -> bool:
    """Check that a duty value is inside 0-100."""
    return MIN_DUTY <= value <= MAX_DUTY
