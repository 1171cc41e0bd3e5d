"""Domain services."""
from .tie_breaker import TieBreaker, splitmix64

__all__ = ['TieBreaker', 'splitmix64']
