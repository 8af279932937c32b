"""Deterministic match simulation core."""
from core_sim.match import MatchResult, simulate_match
from core_sim.prng import InvalidRangeError, create_prng
from core_sim.weather import Weather

__all__ = ['MatchResult', 'simulate_match', 'InvalidRangeError', 'create_prng', 'Weather']
