"""Model classes declared with postponed (string) annotations."""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import Annotated, ClassVar, Optional

from jsonview import JsonIgnore


@dataclass
class Account:
    user: str = "u"
    password: Annotated[Optional[str], JsonIgnore()] = "hunter2"
    kind: ClassVar[str] = "account"


@dataclass
class Invite:
    email: str = "e"
    seed: InitVar[int] = 0
    code: str = field(default="c")

    def __post_init__(self, seed: int) -> None:
        self.code = f"{self.code}{seed}"


@dataclass
class Dangling:
    name: str = "d"
    link: Optional[Missing] = None  # noqa: F821
