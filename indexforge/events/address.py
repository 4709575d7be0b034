from __future__ import annotations

from dataclasses import dataclass
import re

_HEX = re.compile(r"^[0-9a-fA-F]{1,64}$")
_SPECIAL_LIMIT = 0x10


@dataclass(frozen=True)
class AccountAddress:
    """A 32-byte on-chain account address."""

    value: int

    @staticmethod
    def parse(s: str) -> "AccountAddress":
        text = str(s).strip()
        if not text:
            raise ValueError("Account address string is required.")
        digits = text[2:] if text[:2].lower() == "0x" else text
        if not _HEX.match(digits):
            raise ValueError(f"Invalid account address: {text}")
        return AccountAddress(int(digits, 16))

    def is_special(self) -> bool:
        return self.value < _SPECIAL_LIMIT

    def to_standard_string(self) -> str:
        # special addresses stay short (0x1), all others are zero-padded to 64 digits
        if self.is_special():
            return f"0x{self.value:x}"
        return f"0x{self.value:064x}"

    def __str__(self) -> str:
        return self.to_standard_string()
