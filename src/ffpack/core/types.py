"""
Shared pydantic base model and wire-level field types for the manifest.
"""

from abc import ABC, abstractmethod
import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, model_serializer
import semver

DIGEST_SIZE = 32

_HEX_DIGEST = re.compile(r"[0-9a-fA-F]{%d}" % (DIGEST_SIZE * 2))
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


class ManifestModel(BaseModel):
    """Base for every manifest object. Absent optional fields are left out on dump."""

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: Any) -> Any:
        data = handler(self)
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


def _decode_digest(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        if len(value) != DIGEST_SIZE:
            raise ValueError(f"blake3 digest must be {DIGEST_SIZE} bytes, got {len(value)}")
        return bytes(value)
    if isinstance(value, str):
        if not _HEX_DIGEST.fullmatch(value):
            raise ValueError(
                f"blake3 digest must be {DIGEST_SIZE * 2} hex characters, got {value!r}"
            )
        return bytes.fromhex(value)
    raise ValueError(f"blake3 digest must be bytes or a hex string, got {type(value).__name__}")


def _check_relative_path(value: Any) -> Any:
    if isinstance(value, str) and (value.startswith("/") or _DRIVE_PREFIX.match(value)):
        raise ValueError(f"path must be relative, got {value!r}")
    return value


def path_key(path: str) -> tuple[str, ...]:
    """Comparison key for a relative path: its non-empty components."""
    return tuple(part for part in path.split("/") if part)


def _coerce_semver(value: Any) -> semver.Version:
    if isinstance(value, semver.Version):
        return value
    if isinstance(value, str):
        return semver.Version.parse(value)
    raise ValueError(f"expected a semantic version string, got {type(value).__name__}")


# 32 raw bytes in memory, 64 lowercase hex characters on the wire
Digest = Annotated[
    bytes,
    BeforeValidator(_decode_digest),
    PlainSerializer(lambda digest: digest.hex(), return_type=str),
]

# Path relative to some base directory, stored exactly as written
RelativePath = Annotated[str, BeforeValidator(_check_relative_path)]

SemVer = Annotated[
    semver.Version,
    BeforeValidator(_coerce_semver),
    PlainSerializer(lambda version: str(version), return_type=str),
]


class OrderedByKey(ABC):
    """
    Mixin giving rich comparisons from a ``_sort_key`` method.

    Equality is left to the model; only ``<``, ``<=``, ``>`` and ``>=``
    are derived.
    """

    @abstractmethod
    def _sort_key(self) -> tuple: ...

    def _comparable(self, other: object) -> bool:
        return isinstance(other, OrderedByKey) and isinstance(other, self._compare_base())

    @classmethod
    def _compare_base(cls) -> type:
        return cls

    def __lt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() < other._sort_key()  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() <= other._sort_key()  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() > other._sort_key()  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() >= other._sort_key()  # type: ignore[attr-defined]


def optional_key(value: Any) -> tuple:
    """Sort key placing an absent value before any present one."""
    return (0,) if value is None else (1, value)
