from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .errors import InvalidConfigError


class WeightPolicy(Protocol):
    """Computes the new weight of an induction word after its language wins a round."""

    name: str

    def adjust(self, current: float, total_score: float, n_tokens: int) -> float: ...


@dataclass(frozen=True)
class MeanAdjustment:
    """
    Damped running mean: pull the weight halfway toward the sentence-level mean weight.

        new = (current + total_score / n_tokens) / 2

    With an axiom (1.0) in the sentence the mean stays high and co-occurring inductions climb
    toward 1.0 over repeated rounds; without one, inductions converge on their shared midpoint.

    Example, "hello" as an induction at 0.25 next to the axiom "world":

        0. hello=0.25
        1. hello=0.4375
        2. hello=0.578125
        3. hello=0.68359
    """

    name: str = "mean"

    def adjust(self, current: float, total_score: float, n_tokens: int) -> float:
        if n_tokens <= 0:
            return current
        return (current + (total_score / n_tokens)) / 2


@dataclass(frozen=True)
class ThresholdMeanAdjustment:
    """
    Same update as MeanAdjustment, but only for sentences longer than `min_tokens` words.

    Short sentences give unstable classifications; gating keeps them from moving weights.
    """

    min_tokens: int = 6
    name: str = "threshold"

    def adjust(self, current: float, total_score: float, n_tokens: int) -> float:
        if n_tokens <= self.min_tokens:
            return current
        return (current + (total_score / n_tokens)) / 2


def get_weight_policy(name: str = "mean", *, min_tokens: int = 6) -> WeightPolicy:
    key = str(name or "").strip().lower()
    if key == "mean":
        return MeanAdjustment()
    if key == "threshold":
        return ThresholdMeanAdjustment(min_tokens=max(0, int(min_tokens)))
    raise InvalidConfigError("weight_policy must be one of: mean, threshold")
