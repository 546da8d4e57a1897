"""Composable wait policies.

A Policy maps (attempts, elapsed) to a wait in nanoseconds, 0, or STOP.
Leaf policies compute a wait; decorators wrap one inner policy and transform
its decision.

Example:
    >>> from retrykit.runtime.policy import Exponential, LimitAttempts, Max, Randomize
    >>> from retrykit.foundation.duration import SECOND, MINUTE
    >>> policy = LimitAttempts(10, Max(MINUTE, Randomize(0.5, Exponential(SECOND, 2))))
"""

from .backoff import Constant, Exponential, Immediate, Linear
from .base import Composable, Policy
from .decorators import LimitAttempts, LimitTotal, Max, Randomize
from .spec import PolicySpec, load_policy, parse_policy_spec

__all__ = [
    # Protocol
    "Policy",
    "Composable",
    # Leaf policies
    "Immediate",
    "Constant",
    "Linear",
    "Exponential",
    # Decorators
    "LimitAttempts",
    "LimitTotal",
    "Max",
    "Randomize",
    # Declarative config
    "PolicySpec",
    "load_policy",
    "parse_policy_spec",
]
