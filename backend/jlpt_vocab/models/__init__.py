from .vocabulary import JLPTLevel, Vocabulary


__all__ = [
    "JLPTLevel",
    "Vocabulary",
]
