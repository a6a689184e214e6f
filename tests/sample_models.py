"""Object graphs shared by the jsonview tests.

Importable as ``sample_models`` (tests/ is on sys.path through conftest).
"""
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar, Dict, List, Optional

from jsonview import JsonIgnore, ignored, json_ignore_properties


@dataclass
class Address:
    city: Optional[str] = None
    zip: Optional[str] = None


@dataclass
class Item:
    x: Any = None
    y: Any = None


@dataclass
class Holder:
    items: List[Any] = field(default_factory=list)


@dataclass
class Customer:
    name: Optional[str] = None
    address: Optional[Address] = None
    email: Optional[str] = None
    password: Annotated[Optional[str], JsonIgnore()] = None
    registry: ClassVar[Dict[str, Any]] = {}


@json_ignore_properties("token")
@dataclass
class Session:
    user: Optional[str] = None
    token: Optional[str] = None
    secret: Optional[str] = ignored(default=None)


@dataclass
class Animal:
    legs: int = 4


@dataclass
class Mammal(Animal):
    fur: str = "brown"


@dataclass
class Dog(Mammal):
    name: str = "rex"


@dataclass
class Node:
    label: Optional[str] = None
    child: Optional["Node"] = None
    hidden: Annotated[Optional[str], JsonIgnore()] = None


class Point:
    """Plain class: properties come from the instance __dict__."""

    def __init__(self, x, y):
        self.x = x
        self.y = y
        self._cache = "internal"


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self, a, b=None):
        self.a = a
        if b is not None:
            self.b = b


class Empty:
    pass
