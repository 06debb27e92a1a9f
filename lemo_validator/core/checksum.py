"""
Check digit calculations.

Weighted modulo-11 sums shared by the birth number, identification
number and VIN validators. Each identifier maps a remainder of 10
differently: birth numbers use 0, VINs use the character "X".
"""

from typing import Dict, Sequence, Tuple

IDENTIFICATION_NUMBER_WEIGHTS: Tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2)

# Position 9 (index 8) holds the check character itself and carries no weight
VIN_WEIGHTS: Tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2, 10, 0, 9, 8, 7, 6, 5, 4, 3, 2)
VIN_CHECK_POSITION = 8

VIN_CHAR_VALUES: Dict[str, int] = {
    'A': 1, 'J': 1,
    'B': 2, 'K': 2, 'S': 2,
    'C': 3, 'L': 3, 'T': 3,
    'D': 4, 'M': 4, 'U': 4,
    'E': 5, 'N': 5, 'V': 5,
    'F': 6, 'W': 6,
    'G': 7, 'P': 7, 'X': 7,
    'H': 8, 'Y': 8,
    'R': 9, 'Z': 9,
}
VIN_CHAR_VALUES.update({str(digit): digit for digit in range(10)})


def weighted_mod11(digits: Sequence[int], weights: Sequence[int]) -> int:
    """
    Weighted sum of digits reduced modulo 11.

    Args:
        digits: Numeric values, one per position
        weights: Weight per position (same length as digits)

    Returns:
        Remainder in the range 0..10
    """
    if len(digits) != len(weights):
        raise ValueError(f"Got {len(digits)} digits for {len(weights)} weights")
    return sum(d * w for d, w in zip(digits, weights)) % 11


def birth_number_check_digit(base: str) -> int:
    """
    Check digit of a Czech/Slovak birth number.

    The first nine digits read as one integer, modulo 11. A remainder
    of 10 gives check digit 0.

    Example:
        birth_number_check_digit("710319274")  # 5
    """
    remainder = int(base) % 11
    return 0 if remainder == 10 else remainder


def identification_number_check_digit(first_seven: str) -> int:
    """
    Check digit of a Czech organization identification number (ICO).

    Digits are weighted 8 down to 2. Remainders 0 and 10 give 1,
    remainder 1 gives 0, anything else gives 11 - remainder.

    Example:
        identification_number_check_digit("2559664")  # 1
    """
    remainder = weighted_mod11([int(c) for c in first_seven], IDENTIFICATION_NUMBER_WEIGHTS)
    if remainder in (0, 10):
        return 1
    if remainder == 1:
        return 0
    return 11 - remainder


def vin_check_character(vin: str) -> str:
    """
    Expected check character (position 9) of a 17-character VIN.

    Raises:
        KeyError: If a character has no numeric value (I, O, Q, lowercase...)

    Example:
        vin_check_character("1M8GDM9AXKP042788")  # "X"
    """
    values = [
        0 if i == VIN_CHECK_POSITION else VIN_CHAR_VALUES[char]
        for i, char in enumerate(vin)
    ]
    remainder = weighted_mod11(values, VIN_WEIGHTS)
    return 'X' if remainder == 10 else str(remainder)
