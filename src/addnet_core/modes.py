from __future__ import annotations

from enum import Enum

from addnet_core.errors import AddNetValidateModeError


class ValidateMode(str, Enum):
    NONE = "none"
    STRICT = "strict"


def coerce_validate_mode(
    mode: ValidateMode | str | None, *, context: str | None = None
) -> ValidateMode:
    if mode is None or mode == "":
        return ValidateMode.NONE
    if isinstance(mode, ValidateMode):
        return mode
    if isinstance(mode, str):
        value = mode.strip().lower()
        if value == ValidateMode.NONE.value:
            return ValidateMode.NONE
        if value == ValidateMode.STRICT.value:
            return ValidateMode.STRICT
    raise AddNetValidateModeError(
        mode=mode,
        allowed=(ValidateMode.NONE.value, ValidateMode.STRICT.value),
        context=context,
    )


__all__ = ["ValidateMode", "coerce_validate_mode"]
