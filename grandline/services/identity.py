"""
Caller identity as resolved by the session layer.

The engine trusts whatever the session layer hands it; ``None`` means the
caller is not logged in.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    user_id: str
    display_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.display_name or self.user_id
