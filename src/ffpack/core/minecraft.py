"""
Minecraft version parsing and ordering.

Two grammars are understood:

- releases, ``x.y`` or ``x.y.z``
- snapshots, ``AAwBBx`` (year, week, one or more specifier characters)

Every snapshot orders after every release. Between releases an omitted
patch orders before any explicit patch, so ``1.18 < 1.18.0 < 1.18.1``.
"""

from abc import abstractmethod
import logging
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BeforeValidator, ConfigDict, Field

from ffpack.core.types import ManifestModel, optional_key

logger = logging.getLogger(__name__)

U16_MAX = 0xFFFF

# Compiled once at import and shared by every parse call
RELEASE_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")
SNAPSHOT_PATTERN = re.compile(r"^(\d+)w(\d+)(\w+)$")

U16 = Annotated[int, Field(ge=0, le=U16_MAX, strict=True)]


class MinecraftVersionError(ValueError):
    """Base error for Minecraft version parsing"""


class NoSupportedPattern(MinecraftVersionError):
    """The input matched neither the release nor the snapshot grammar."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Version provided did not match any supported pattern: {version}")


class InvalidComponent(MinecraftVersionError):
    """A numeric component did not fit in an unsigned 16-bit integer."""

    def __init__(self, component: str, source: ValueError) -> None:
        self.component = component
        self.source = source
        super().__init__(f"Invalid version component {component!r}: {source}")


def _parse_u16(raw: str) -> int:
    if not raw.isascii() or not raw.isdigit():
        raise ValueError(f"invalid digit found in string {raw!r}")
    value = int(raw)
    if value > U16_MAX:
        raise ValueError(f"number too large to fit in target type: {raw}")
    return value


def _component(raw: str) -> int:
    try:
        return _parse_u16(raw)
    except ValueError as e:
        raise InvalidComponent(raw, e) from e


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


class MinecraftVersion(ManifestModel):
    """
    A decoded Minecraft version.

    Use :meth:`parse` to build one from its display string. Instances are
    immutable and hashable.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> "Release | Snapshot":
        """Parse ``text`` as a release, falling back to a snapshot."""
        logger.debug("Parsing Minecraft version %r", text)

        if match := RELEASE_PATTERN.fullmatch(text):
            logger.debug("Matched release grammar")
            major, minor, patch = match.groups()
            return Release(
                major=_component(major),
                minor=_component(minor),
                patch=_component(patch) if patch is not None else None,
            )

        if match := SNAPSHOT_PATTERN.fullmatch(text):
            logger.debug("Matched snapshot grammar")
            year, week, specifier = match.groups()
            return Snapshot(year=_component(year), week=_component(week), specifier=specifier)

        raise NoSupportedPattern(text)

    @abstractmethod
    def _order_priority(self) -> int: ...

    @abstractmethod
    def _components(self) -> tuple: ...

    def compare(self, other: "MinecraftVersion") -> int:
        """Three-way comparison: negative, zero or positive."""
        priority = _cmp(self._order_priority(), other._order_priority())
        if priority:
            return priority
        # Priorities are unique per kind, so equal priority means equal kind
        if type(self) is not type(other):
            raise AssertionError(
                f"{type(self).__name__} and {type(other).__name__} share an order priority"
            )
        return _cmp(self._components(), other._components())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MinecraftVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, MinecraftVersion):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, MinecraftVersion):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, MinecraftVersion):
            return NotImplemented
        return self.compare(other) >= 0


class Release(MinecraftVersion):
    """Release version of the game (``x.y`` or ``x.y.z``)."""

    type: Literal["Release"] = "Release"
    major: U16
    minor: U16
    # None when the version string had no patch component
    patch: U16 | None = None

    def _order_priority(self) -> int:
        return 1

    def _components(self) -> tuple:
        return (self.major, self.minor, optional_key(self.patch))

    def __str__(self) -> str:
        if self.patch is not None:
            return f"{self.major}.{self.minor}.{self.patch}"
        return f"{self.major}.{self.minor}"


class Snapshot(MinecraftVersion):
    """Snapshot version of the game (``AAwBBx``)."""

    type: Literal["Snapshot"] = "Snapshot"
    year: U16
    week: U16
    # A string in case a multi-letter snapshot ever ships
    specifier: str = Field(min_length=1)

    def _order_priority(self) -> int:
        return 2

    def _components(self) -> tuple:
        return (self.year, self.week, self.specifier)

    def __str__(self) -> str:
        return f"{self.year}w{self.week}{self.specifier}"


def parse_minecraft_version(text: str) -> Release | Snapshot:
    """Parse a Minecraft version string."""
    return MinecraftVersion.parse(text)


def default_minecraft_version() -> Release:
    return Release(major=1, minor=19)


def _parse_if_string(value: Any) -> Any:
    if isinstance(value, str):
        return MinecraftVersion.parse(value)
    return value


# Field type for a Minecraft version; tagged on "type" in JSON, bare strings are parsed
Minecraft = Annotated[
    Union[Release, Snapshot],
    Field(discriminator="type"),
    BeforeValidator(_parse_if_string),
]

__all__ = [
    "InvalidComponent",
    "Minecraft",
    "MinecraftVersion",
    "MinecraftVersionError",
    "NoSupportedPattern",
    "Release",
    "Snapshot",
    "default_minecraft_version",
    "parse_minecraft_version",
]
