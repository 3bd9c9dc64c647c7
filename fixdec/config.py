"""Engine configuration.

Defaults for the context every decimal type starts with. Values come from
environment variables so deployments can pick a house rounding policy
without code changes:

- FIXDEC_ROUNDING: rounding mode name (default: half_even)
- FIXDEC_PRECISION: significant digits, or empty for width-limited (default: empty)
- FIXDEC_TRAPS: comma-separated signal names to trap (default: none)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

import structlog

from fixdec.context import Context, RoundingMode
from fixdec.signals import NO_SIGNALS, Signal, parse_signal_names

__all__ = ["EngineSettings", "DEFAULT_SETTINGS", "DEFAULT_CONTEXT"]

logger = structlog.get_logger()

ENV_ROUNDING = "FIXDEC_ROUNDING"
ENV_PRECISION = "FIXDEC_PRECISION"
ENV_TRAPS = "FIXDEC_TRAPS"


@dataclass(frozen=True)
class EngineSettings:
    """Centralized defaults for the decimal engine.

    Attributes:
        rounding: Default rounding mode (default: HALF_EVEN)
        precision: Default precision, None for width-limited (default: None)
        traps: Signals trapped by default (default: none)
    """

    rounding: RoundingMode = RoundingMode.HALF_EVEN
    precision: int | None = None
    traps: Signal = NO_SIGNALS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            ValueError: If a variable holds an unknown mode, signal or a
                non-positive precision
        """
        env = os.environ if environ is None else environ
        settings = cls()

        rounding_name = env.get(ENV_ROUNDING, "").strip()
        if rounding_name:
            settings = replace(settings, rounding=RoundingMode.from_name(rounding_name))

        precision_text = env.get(ENV_PRECISION, "").strip()
        if precision_text:
            try:
                precision = int(precision_text)
            except ValueError as err:
                raise ValueError(f"{ENV_PRECISION} must be an integer: '{precision_text}'") from err
            if precision < 1:
                raise ValueError(f"{ENV_PRECISION} must be positive, got {precision}")
            settings = replace(settings, precision=precision)

        traps_text = env.get(ENV_TRAPS, "").strip()
        if traps_text:
            settings = replace(settings, traps=parse_signal_names(traps_text))

        if settings != cls():
            logger.info(
                "engine_settings_loaded",
                rounding=settings.rounding.value,
                precision=settings.precision,
                traps=settings.traps.names(),
            )
        return settings

    def context(self) -> Context:
        """Context carrying these defaults."""
        return Context(precision=self.precision, rounding=self.rounding, traps=self.traps)


DEFAULT_SETTINGS = EngineSettings.from_env()
DEFAULT_CONTEXT = DEFAULT_SETTINGS.context()
