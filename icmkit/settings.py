from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .engine.icm import DEFAULT_MEMO_CAPACITY
from .engine.pushfold import CALL_EQUITY

ENV_PREFIX = "ICMKIT_"


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Defaults for the CLIs. Each field can be overridden with an
    ICMKIT_<FIELD> environment variable, e.g. ICMKIT_EQUITY_ITERATIONS=20000.
    """
    equity_iterations: int = 10_000
    range_iterations: int = 1_000
    memo_capacity: int = DEFAULT_MEMO_CAPACITY
    call_equity: float = CALL_EQUITY
    seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        kwargs = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            kwargs[f.name] = _coerce(f.name, raw)
        s = cls(**kwargs)
        s.validate()
        return s

    def validate(self) -> None:
        if self.equity_iterations <= 0 or self.range_iterations <= 0:
            raise ValueError("iteration counts must be positive")
        if self.memo_capacity <= 0:
            raise ValueError("memo_capacity must be positive")
        if not (0.0 <= self.call_equity <= 1.0):
            raise ValueError("call_equity must be within [0, 1]")


_INT_FIELDS = {"equity_iterations", "range_iterations", "memo_capacity", "seed"}
_FLOAT_FIELDS = {"call_equity"}


def _coerce(name: str, raw: str):
    try:
        if name in _INT_FIELDS:
            return int(raw)
        if name in _FLOAT_FIELDS:
            return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name.upper()}={raw!r} is not a number") from None
    return raw.upper() if name == "log_level" else raw
