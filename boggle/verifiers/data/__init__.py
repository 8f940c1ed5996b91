"""Dictionary data for word verification."""

from .wordlist import Dictionary, set_default_dictionary
from .wordlist import check as check_word

__all__ = ["Dictionary", "set_default_dictionary", "check_word"]
