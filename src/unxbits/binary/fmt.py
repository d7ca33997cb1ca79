from typing import List


def hex_(num: int, width: int = 2) -> str:
    """Zero-padded upper-case hex, one byte wide by default."""
    return f"{num:0{width}X}"

def bin_(num: int, width: int = 32) -> str:
    """Zero-padded binary, 32 bits wide by default."""
    return f"{num:0{width}b}"

def h2b(num: int) -> str:
    return hex_(num, 4)

def h4b(num: int) -> str:
    return hex_(num, 8)

def hex_str(data: bytes) -> str:
    """Space-separated hex dump of a byte string."""
    return " ".join(hex_(b) for b in data)

def set_bits(word: int) -> List[int]:
    """Positions of the one-bits in `word`, lowest first."""
    return [i for i in range(word.bit_length()) if (word >> i) & 1]
