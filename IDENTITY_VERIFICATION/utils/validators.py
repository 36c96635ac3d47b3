import re

AADHAAR_PATTERN = re.compile(r"^[2-9][0-9]{11}$")
PAN_PATTERN     = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")

# Verhoeff multiplication table (dihedral group D5)
_D = [
    [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
    [1, 2, 3, 4, 0, 6, 7, 8, 9, 5],
    [2, 3, 4, 0, 1, 7, 8, 9, 5, 6],
    [3, 4, 0, 1, 2, 8, 9, 5, 6, 7],
    [4, 0, 1, 2, 3, 9, 5, 6, 7, 8],
    [5, 9, 8, 7, 6, 0, 4, 3, 2, 1],
    [6, 5, 9, 8, 7, 1, 0, 4, 3, 2],
    [7, 6, 5, 9, 8, 2, 1, 0, 4, 3],
    [8, 7, 6, 5, 9, 3, 2, 1, 0, 4],
    [9, 8, 7, 6, 5, 4, 3, 2, 1, 0],
]

# Verhoeff permutation table
_P = [
    [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
    [1, 5, 7, 6, 2, 8, 3, 0, 9, 4],
    [5, 8, 0, 3, 7, 9, 6, 1, 4, 2],
    [8, 9, 1, 6, 0, 4, 3, 5, 2, 7],
    [9, 4, 5, 3, 1, 2, 6, 8, 7, 0],
    [4, 2, 8, 6, 5, 7, 3, 9, 0, 1],
    [2, 7, 9, 3, 8, 0, 6, 4, 1, 5],
    [7, 0, 4, 6, 9, 1, 3, 2, 5, 8],
]

_INV = [0, 4, 3, 2, 1, 5, 6, 7, 8, 9]


def normalize_aadhaar(raw) -> str:
    if raw is None:
        return ""
    return "".join(str(raw).split())


def normalize_pan(raw) -> str:
    if raw is None:
        return ""
    return str(raw).upper().strip()


def verhoeff_checksum(number: str) -> int:
    """Run Verhoeff over the digits least-significant first; 0 means the number checks out."""
    c = 0
    for i, digit in enumerate(reversed(number)):
        c = _D[c][_P[i % 8][int(digit)]]
    return c


def verhoeff_check_digit(number: str) -> int:
    """Check digit to append to ``number`` so the result passes :func:`verhoeff_checksum`."""
    c = 0
    for i, digit in enumerate(reversed(number)):
        c = _D[c][_P[(i + 1) % 8][int(digit)]]
    return _INV[c]


def is_valid_aadhaar(raw) -> bool:
    s = normalize_aadhaar(raw)
    if not AADHAAR_PATTERN.match(s):
        return False
    if len(set(s)) == 1:
        return False
    return verhoeff_checksum(s) == 0


def is_valid_pan(raw) -> bool:
    return bool(PAN_PATTERN.match(normalize_pan(raw)))


def mask_identifier(value) -> str:
    s = "" if value is None else str(value)
    if len(s) <= 4:
        return "*" * len(s)
    return "*" * (len(s) - 4) + s[-4:]
