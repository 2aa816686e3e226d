# --- alphabet.py ---

# Code length
CODE_LENGTH = 6

# Uppercase letters and digits without the easily confused I, L, O, 0, 1
ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
VALID_CHARS = list(ALPHABET)

# Trie edge label for "any one symbol"; never a valid char itself
WILDCARD = "wildcard"


def is_valid_char(ch):
    """True if ``ch`` is a single symbol of the code alphabet."""
    return len(ch) == 1 and ch in ALPHABET
