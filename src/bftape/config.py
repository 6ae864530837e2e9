from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Mapping, Optional

EOF_BYTE = 0xFF  # -1 stored in a byte cell


class OnEOF(enum.Enum):
    STORE_ZERO = 'zero'
    STORE_EOF = 'eof'
    DO_NOTHING = 'nothing'

    @classmethod
    def parse(cls, name: str) -> "OnEOF":
        key = name.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        choices = ', '.join(m.value for m in cls)
        raise ValueError(f"Unknown end-of-input action {name!r} (expected one of: {choices})")


_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Configuration:
    on_eof: OnEOF = OnEOF.STORE_ZERO
    debug_enabled: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        env = os.environ if environ is None else environ
        on_eof = env.get("BFTAPE_ON_EOF")
        debug = env.get("BFTAPE_DEBUG", "")
        return cls(
            on_eof=OnEOF.parse(on_eof) if on_eof else OnEOF.STORE_ZERO,
            debug_enabled=debug.strip().lower() in _TRUTHY,
        )
