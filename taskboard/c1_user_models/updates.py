"""Explicit change set for profile updates."""

from dataclasses import dataclass
from typing import Any

from taskboard.c1_common_types.sentinels import UNSET


@dataclass(frozen=True)
class ProfileUpdate:
    """The profile fields a user may change about themselves."""

    name: Any = UNSET
    email: Any = UNSET
    avatar_url: Any = UNSET
