"""Sentinel for "field not supplied" in partial updates."""


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Distinguishes an omitted field from one explicitly set to None.
UNSET = _Unset()
