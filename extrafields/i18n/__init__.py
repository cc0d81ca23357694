from .lexicon import LEXICONS, Lexicon

__all__ = ["LEXICONS", "Lexicon"]
