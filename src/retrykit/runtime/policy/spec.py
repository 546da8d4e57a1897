"""Declarative policy configuration.

Describes a policy chain as plain data (a dict or JSON document), validated
with pydantic. Each node names its variant in `kind`; decorators nest their
inner policy under `policy`. Durations are given in seconds.

Example:
    >>> from retrykit import SECOND
    >>> policy = load_policy({
    ...     "kind": "limit_attempts", "limit": 5,
    ...     "policy": {"kind": "max", "cap": 30,
    ...         "policy": {"kind": "exponential", "initial": 0.5, "multiplier": 2}},
    ... })
    >>> policy.wait(3, 0) == 2 * SECOND
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, PositiveFloat, PositiveInt, TypeAdapter

from retrykit.foundation.duration import seconds

from .backoff import Constant, Exponential, Immediate, Linear
from .base import Policy
from .decorators import LimitAttempts, LimitTotal, Max, Randomize


class _PolicySpec(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ImmediateSpec(_PolicySpec):
    kind: Literal["immediate"] = "immediate"

    def build(self) -> Policy:
        return Immediate()


class ConstantSpec(_PolicySpec):
    kind: Literal["constant"] = "constant"
    delay: NonNegativeFloat

    def build(self) -> Policy:
        return Constant(seconds(self.delay))


class LinearSpec(_PolicySpec):
    kind: Literal["linear"] = "linear"
    initial: NonNegativeFloat
    increment: NonNegativeFloat

    def build(self) -> Policy:
        return Linear(seconds(self.initial), seconds(self.increment))


class ExponentialSpec(_PolicySpec):
    kind: Literal["exponential"] = "exponential"
    initial: NonNegativeFloat
    multiplier: PositiveFloat = 2.0

    def build(self) -> Policy:
        return Exponential(seconds(self.initial), self.multiplier)


class LimitAttemptsSpec(_PolicySpec):
    kind: Literal["limit_attempts"] = "limit_attempts"
    limit: PositiveInt
    policy: PolicySpec

    def build(self) -> Policy:
        return LimitAttempts(self.limit, self.policy.build())


class LimitTotalSpec(_PolicySpec):
    kind: Literal["limit_total"] = "limit_total"
    limit: NonNegativeFloat
    policy: PolicySpec

    def build(self) -> Policy:
        return LimitTotal(seconds(self.limit), self.policy.build())


class MaxSpec(_PolicySpec):
    kind: Literal["max"] = "max"
    cap: NonNegativeFloat
    policy: PolicySpec

    def build(self) -> Policy:
        return Max(seconds(self.cap), self.policy.build())


class RandomizeSpec(_PolicySpec):
    kind: Literal["randomize"] = "randomize"
    factor: Annotated[float, Field(ge=0.0, le=1.0)]
    policy: PolicySpec

    def build(self) -> Policy:
        return Randomize(self.factor, self.policy.build())


PolicySpec = Annotated[
    Union[
        ImmediateSpec,
        ConstantSpec,
        LinearSpec,
        ExponentialSpec,
        LimitAttemptsSpec,
        LimitTotalSpec,
        MaxSpec,
        RandomizeSpec,
    ],
    Field(discriminator="kind"),
]

for _model in (LimitAttemptsSpec, LimitTotalSpec, MaxSpec, RandomizeSpec):
    _model.model_rebuild()

_adapter: TypeAdapter[PolicySpec] = TypeAdapter(PolicySpec)


def parse_policy_spec(data: Mapping[str, object] | str | bytes) -> PolicySpec:
    """Validate a dict or JSON document into a policy spec tree.

    Raises:
        pydantic.ValidationError: If the document is malformed
    """
    if isinstance(data, (str, bytes)):
        return _adapter.validate_json(data)
    return _adapter.validate_python(data)


def load_policy(data: Mapping[str, object] | str | bytes) -> Policy:
    """Build a Policy from a dict or JSON document."""
    return parse_policy_spec(data).build()
