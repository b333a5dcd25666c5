from .words import Word, fold_word


__all__ = [
    "Word",
    "fold_word",
]
