"""
Feature descriptors and the feature registry.

A FeatureDescriptor says what a feature is: its units, bounds, whether it can
be missing, where it gets censored and how many frames of history it needs.
How a feature is computed is a separate strategy function bound to the
descriptor's symbol at declaration time, so a derivative feature can reuse an
existing feature's computation instead of duplicating it.

The registry has two phases. During initialization `declare` fills it; after
`freeze()` it only serves `lookup`, `is_declared`, `all` and `evaluate`, which
are then safe to call from several threads at once.

Usage:

    registry = FeatureRegistry()
    registry.declare("Speed", "speed", float, "m/s", strategy=_speed)
    registry.freeze()

    fval = registry.evaluate("speed", record, roadway, vehicle_index=1)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

from scene_features.features.values import FeatureState, FeatureValue

logger = logging.getLogger(__name__)


class FeatureError(Exception):
    """Base class for feature configuration errors."""


class FeatureConfigurationError(FeatureError, ValueError):
    """Raised for an invalid declaration: duplicate symbol, inverted bounds, late declaration."""


class FeatureNotFoundError(FeatureError, KeyError):
    """Raised when looking up a symbol that was never declared."""


@dataclass(frozen=True)
class FeatureDescriptor:
    name: str = field(compare=False)
    symbol: str
    units: str = field(compare=False)
    inherent_type: type = field(default=float, compare=False)
    lower_bound: float = field(default=-math.inf, compare=False)
    upper_bound: float = field(default=math.inf, compare=False)
    can_be_missing: bool = field(default=False, compare=False)
    censor_low: float = field(default=math.nan, compare=False)
    censor_high: float = field(default=math.nan, compare=False)
    history_depth: int = field(default=1, compare=False)

    def __hash__(self) -> int:
        return hash(self.symbol)


# strategy(descriptor, record, roadway, vehicle_index, pastframe) -> FeatureValue
FeatureStrategy = Callable[[FeatureDescriptor, Any, Any, int, int], FeatureValue]
FeatureRef = str | FeatureDescriptor


class FeatureRegistry:
    """Catalog mapping feature symbols to descriptors and their computation strategies."""

    def __init__(self) -> None:
        self._descriptors: dict[str, FeatureDescriptor] = {}
        self._strategies: dict[str, FeatureStrategy] = {}
        self._frozen = False

    def declare(
        self,
        name: str,
        symbol: str,
        inherent_type: type,
        units: str,
        *,
        strategy: FeatureStrategy,
        lower_bound: float = -math.inf,
        upper_bound: float = math.inf,
        can_be_missing: bool = False,
        censor_low: float = math.nan,
        censor_high: float = math.nan,
        history_depth: int = 1,
    ) -> FeatureDescriptor:
        """
        Register a new feature and bind its computation strategy.

        Raises:
            FeatureConfigurationError: If the registry is frozen, the symbol is
                already declared, or lower_bound <= upper_bound does not
                hold (a NaN bound included).
        """
        if self._frozen:
            raise FeatureConfigurationError(
                f"Cannot declare {symbol!r}: the feature registry is frozen"
            )
        if symbol in self._descriptors:
            raise FeatureConfigurationError(
                f"Duplicate feature symbol {symbol!r} "
                f"(already declared as {self._descriptors[symbol].name!r})"
            )
        if not lower_bound <= upper_bound:
            raise FeatureConfigurationError(
                f"Feature {symbol!r}: lower_bound {lower_bound} > upper_bound {upper_bound}"
            )

        descriptor = FeatureDescriptor(
            name=name,
            symbol=symbol,
            units=units,
            inherent_type=inherent_type,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            can_be_missing=can_be_missing,
            censor_low=censor_low,
            censor_high=censor_high,
            history_depth=history_depth,
        )
        self._descriptors[symbol] = descriptor
        self._strategies[symbol] = strategy
        logger.debug("Declared feature %s (%s) [%s]", name, symbol, units)
        return descriptor

    def freeze(self) -> None:
        """End the initialization phase; any later declare() call fails."""
        self._frozen = True
        logger.info("Feature registry frozen with %d features", len(self._descriptors))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_declared(self, symbol: str) -> bool:
        return symbol in self._descriptors

    def lookup(self, symbol: str) -> FeatureDescriptor:
        try:
            return self._descriptors[symbol]
        except KeyError:
            raise FeatureNotFoundError(
                f"Unknown feature {symbol!r}. Declared: {sorted(self._descriptors)}"
            ) from None

    def all(self) -> list[FeatureDescriptor]:
        return list(self._descriptors.values())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[FeatureDescriptor]:
        return iter(self.all())

    def evaluate(
        self,
        feature: FeatureRef,
        record: Any,
        roadway: Any,
        vehicle_index: int,
        pastframe: int = 0,
    ) -> FeatureValue:
        """
        Compute a feature for the entity in slot vehicle_index of record[pastframe].

        GOOD values outside a declared censor bound come back as
        CENSORED_HIGH / CENSORED_LOW. NaN censor bounds are ignored.
        """
        descriptor = self._resolve(feature)
        fval = self._strategies[descriptor.symbol](
            descriptor, record, roadway, vehicle_index, pastframe
        )
        return _apply_censoring(fval, descriptor)

    def evaluator(self, feature: FeatureRef) -> Callable[..., FeatureValue]:
        """Return evaluate() bound to one feature: f(record, roadway, vehicle_index, pastframe)."""
        return partial(self.evaluate, self._resolve(feature))

    def _resolve(self, feature: FeatureRef) -> FeatureDescriptor:
        if isinstance(feature, FeatureDescriptor):
            return self.lookup(feature.symbol)
        return self.lookup(feature)


def _apply_censoring(fval: FeatureValue, descriptor: FeatureDescriptor) -> FeatureValue:
    if fval.state != FeatureState.GOOD:
        return fval
    if not math.isnan(descriptor.censor_high) and fval.value > descriptor.censor_high:
        return FeatureValue.censored_high()
    if not math.isnan(descriptor.censor_low) and fval.value < descriptor.censor_low:
        return FeatureValue.censored_low()
    return fval
