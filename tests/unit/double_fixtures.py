"""Types doubled by the unit tests."""

import collections.abc
from abc import ABC, ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, final, runtime_checkable

from pydantic import BaseModel, ConfigDict

DEFAULT_LABELS = ["default"]


class Calculator:
    def __init__(self, base: int = 0):
        self.base = base
        self.initialised = True

    def add(self, a: int, b: int = 1) -> int:
        return self.base + a + b

    def describe(self, *, verbose: bool = False) -> str:
        return "calculator"

    def tag(self, labels=DEFAULT_LABELS):
        return labels

    def _adjust(self, value: int) -> int:
        return value

    def __secret(self) -> None:
        pass

    @final
    def locked(self) -> str:
        return "locked"

    @staticmethod
    def create() -> "Calculator":
        return Calculator()

    @classmethod
    def named(cls, name: str) -> "Calculator":
        return cls()

    async def fetch(self, key: str) -> str | None:
        return key


class AbstractRepository(ABC):
    @abstractmethod
    def get(self, key: str) -> str: ...

    @abstractmethod
    def put(self, key: str, value: str) -> None: ...

    def count(self) -> int:
        return 0


class Greeter(ABC):
    @abstractmethod
    def greet(self, name: str) -> str: ...


class Farewell(ABC):
    @abstractmethod
    def farewell(self, name: str) -> str: ...


class LoudGreeter(ABC):
    @abstractmethod
    def greet(self, name: str) -> str: ...


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


@runtime_checkable
class Flushable(Protocol):
    def flush(self) -> int: ...


class PaymentFailure(Exception, metaclass=ABCMeta):
    @abstractmethod
    def code(self) -> int: ...


class RowSource(collections.abc.Iterable):
    @abstractmethod
    def source_name(self) -> str: ...


class RowFactory(collections.abc.Iterable):
    @abstractmethod
    def __iter__(self) -> collections.abc.Iterator[str]: ...


class Color(Enum):
    RED = 1
    GREEN = 2


@final
class Sealed:
    def value(self) -> int:
        return 1


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def norm(self) -> float:
        return (self.x**2 + self.y**2) ** 0.5


class Reading(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float

    def scaled(self, factor: float) -> float:
        return self.value * factor


class Copyable:
    def __init__(self):
        self.copied = False

    def __copy__(self):
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.copied = True
        return clone

    def value(self) -> int:
        return 1


class FinalCopy:
    @final
    def __copy__(self):
        return self

    def value(self) -> int:
        return 1


class HasMethodNamedMethod:
    def method(self) -> None:
        pass


class Shapes:
    def square(self, side: float) -> float:
        return side * side

    def palette(self) -> Color:
        return Color.GREEN

    def repository(self) -> AbstractRepository:
        raise NotImplementedError

    def names(self) -> list[str]:
        return ["a"]

    def lookup(self) -> dict[str, int]:
        return {}

    def clone(self) -> "Shapes":
        return self

    def scale(self, factor, /, origin=0, *rest, mode: str = "fast", **options):
        return factor
