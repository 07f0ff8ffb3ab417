from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from addnet_core.modes import ValidateMode, coerce_validate_mode
from addnet_core.protocols import ApplyTemplateFn, PlanPassFn


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Rule-engine DI bundle for one rewrite pass."""

    plan_pass_fn: PlanPassFn
    apply_template_fn: ApplyTemplateFn


@dataclass(frozen=True, slots=True)
class DriverConfig:
    """Fixpoint-driver DI bundle.

    max_steps=None derives the pass budget from the network size.
    """

    max_steps: int | None = None
    validate_mode: ValidateMode | str | None = None
    engine_cfg: EngineConfig | None = None


def _env_max_steps(environ: Mapping[str, str]) -> int | None:
    value = environ.get("ADDNET_MAX_STEPS", "").strip()
    if not value:
        return None
    if not value.isdigit():
        raise ValueError("ADDNET_MAX_STEPS must be an integer")
    return int(value)


def driver_config_from_env(environ: Mapping[str, str] | None = None) -> DriverConfig:
    environ = os.environ if environ is None else environ
    return DriverConfig(
        max_steps=_env_max_steps(environ),
        validate_mode=coerce_validate_mode(
            environ.get("ADDNET_VALIDATE_MODE", ""), context="env"
        ),
    )


__all__ = ["EngineConfig", "DriverConfig", "driver_config_from_env"]
