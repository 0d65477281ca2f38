"""
Managed files and the sources they are fetched from.
"""

from abc import abstractmethod
import bisect
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Annotated, Any, ClassVar, Union

from pydantic import (
    AnyUrl,
    BeforeValidator,
    ConfigDict,
    Field,
    GetCoreSchemaHandler,
    PlainSerializer,
)
from pydantic_core import core_schema
from pydantic_core.core_schema import SerializationInfo

from ffpack.core.types import (
    DIGEST_SIZE,
    Digest,
    ManifestModel,
    OrderedByKey,
    RelativePath,
    optional_key,
    path_key,
)


class Side(str, Enum):
    """Whether a file is needed on the client, the server, or both"""

    CLIENT = "Client"
    SERVER = "Server"
    BOTH = "Both"


# ---------- sources ----------


class Source(OrderedByKey, ManifestModel):
    """
    Where a managed file comes from.

    Concrete variants are ordered by ``ORDINAL`` (declaration order) and
    then by their fields. On the wire each variant is wrapped in a
    single-key object naming it, e.g. ``{"Modrinth": {"slug": "sodium"}}``.
    """

    model_config = ConfigDict(frozen=True)

    TAG: ClassVar[str]
    ORDINAL: ClassVar[int]

    @classmethod
    def _compare_base(cls) -> type:
        return Source

    @abstractmethod
    def _fields_key(self) -> tuple: ...

    def _sort_key(self) -> tuple:
        return (self.ORDINAL, self._fields_key())


class UrlSource(Source):
    """Raw URL with no version management"""

    TAG: ClassVar[str] = "Url"
    ORDINAL: ClassVar[int] = 0

    url: AnyUrl
    blake3: Digest

    @classmethod
    def default(cls) -> "UrlSource":
        return cls(
            url="https://example.org/mods/MyAwesomeMod-1.2.3.jar",
            blake3=bytes(DIGEST_SIZE),
        )

    def _fields_key(self) -> tuple:
        return (str(self.url), self.blake3)


class PathSource(Source):
    """File stored next to the manifest, relative to its directory"""

    TAG: ClassVar[str] = "Path"
    ORDINAL: ClassVar[int] = 1

    path: RelativePath
    blake3: Digest

    def _fields_key(self) -> tuple:
        return (path_key(self.path), self.blake3)


class GitSource(Source):
    """Git repository; the file is taken from the head of ``branch`` (or the default branch)"""

    TAG: ClassVar[str] = "Git"
    ORDINAL: ClassVar[int] = 2

    url: AnyUrl
    branch: str | None = None

    def _fields_key(self) -> tuple:
        return (str(self.url), optional_key(self.branch))


class SlugSource(Source):
    """Repository on a supported forge (``github:username/project``, ``gitlab:username/project``)"""

    TAG: ClassVar[str] = "Slug"
    ORDINAL: ClassVar[int] = 3

    slug: str
    branch: str | None = None

    def _fields_key(self) -> tuple:
        return (self.slug, optional_key(self.branch))


class SlugReleasesSource(Source):
    """
    Releases page of a repository on a supported forge.

    ``artifact_regex`` must match exactly one artifact of a release; the
    latest release with a matching artifact is used. ``release_regex``
    optionally narrows which releases are considered.
    """

    TAG: ClassVar[str] = "SlugReleases"
    ORDINAL: ClassVar[int] = 4

    slug: str
    artifact_regex: str
    release_regex: str | None = None

    def _fields_key(self) -> tuple:
        return (self.slug, self.artifact_regex, optional_key(self.release_regex))


class ModrinthSource(Source):
    """Mod hosted on Modrinth"""

    TAG: ClassVar[str] = "Modrinth"
    ORDINAL: ClassVar[int] = 5

    slug: str

    def _fields_key(self) -> tuple:
        return (self.slug,)


class CurseforgeSource(Source):
    """Mod hosted on Curseforge"""

    TAG: ClassVar[str] = "Curseforge"
    ORDINAL: ClassVar[int] = 6

    slug: str

    def _fields_key(self) -> tuple:
        return (self.slug,)


SOURCE_VARIANTS: dict[str, type[Source]] = {
    variant.TAG: variant
    for variant in (
        UrlSource,
        PathSource,
        GitSource,
        SlugSource,
        SlugReleasesSource,
        ModrinthSource,
        CurseforgeSource,
    )
}


def _untag_source(value: Any) -> Any:
    if isinstance(value, Source):
        return value
    if not isinstance(value, dict) or len(value) != 1:
        raise ValueError("source must be an object with exactly one variant key")

    ((tag, fields),) = value.items()
    variant = SOURCE_VARIANTS.get(tag)
    if variant is None:
        raise ValueError(
            f"unknown source variant {tag!r}, expected one of: {', '.join(SOURCE_VARIANTS)}"
        )
    return variant.model_validate(fields)


def _tag_source(source: Source, info: SerializationInfo) -> dict[str, Any]:
    return {source.TAG: source.model_dump(mode=info.mode)}


SourceField = Annotated[
    Union[
        UrlSource,
        PathSource,
        GitSource,
        SlugSource,
        SlugReleasesSource,
        ModrinthSource,
        CurseforgeSource,
    ],
    BeforeValidator(_untag_source),
    PlainSerializer(_tag_source),
]


# ---------- managed files ----------


class ManagedFile(OrderedByKey, ManifestModel):
    """
    A single file the pack installs.

    Files are ordered by ``path`` alone, which is also the identity used
    by :class:`ManagedFileSet`. ``==`` stays structural.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    filename: str
    # Install only in the development profile of the pack
    devel: bool = Field(strict=True)
    # Relative to the game directory
    path: RelativePath
    side: Side = Side.BOTH
    source: SourceField

    @classmethod
    def default(cls) -> "ManagedFile":
        return cls(
            name="My totally awesome mode",
            description="It makes trees blue",
            filename="My Awesome Mod.jar",
            devel=True,
            path="mods/MyAwesomeMod.jar",
            source=UrlSource.default(),
        )

    def _sort_key(self) -> tuple:
        return (path_key(self.path),)


class ManagedFileSet:
    """
    Managed files kept unique by path and sorted ascending by path.

    Paths are compared by their non-empty components, so ``mods/a.jar``
    and ``mods//a.jar`` name the same entry and ``config/a/x.toml``
    sorts before ``config/a-b.toml``.

    Adding a file whose path is already present replaces the existing
    entry, so building a set from a sequence keeps the last file seen
    for each path.
    """

    __slots__ = ("_keys", "_files")

    def __init__(self, files: Iterable[ManagedFile] = ()) -> None:
        self._keys: list[tuple[str, ...]] = []
        self._files: list[ManagedFile] = []
        for file in files:
            self.add(file)

    def add(self, file: ManagedFile) -> None:
        key = path_key(file.path)
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            self._files[index] = file
        else:
            self._keys.insert(index, key)
            self._files.insert(index, file)

    def discard(self, path: str) -> None:
        index = self._index(path)
        if index is not None:
            del self._keys[index]
            del self._files[index]

    def get(self, path: str) -> ManagedFile | None:
        index = self._index(path)
        return self._files[index] if index is not None else None

    def _index(self, path: str) -> int | None:
        key = path_key(path)
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return index
        return None

    def __contains__(self, item: object) -> bool:
        if isinstance(item, ManagedFile):
            item = item.path
        return isinstance(item, str) and self._index(item) is not None

    def __iter__(self) -> Iterator[ManagedFile]:
        return iter(list(self._files))

    def __len__(self) -> int:
        return len(self._files)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManagedFileSet):
            return NotImplemented
        return self._files == other._files

    def __repr__(self) -> str:
        return f"ManagedFileSet({self._files!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        list_schema = handler.generate_schema(list[ManagedFile])
        from_list = core_schema.no_info_after_validator_function(cls, list_schema)
        return core_schema.json_or_python_schema(
            json_schema=from_list,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_list]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda files: list(files),
                return_schema=list_schema,
            ),
        )


__all__ = [
    "CurseforgeSource",
    "GitSource",
    "ManagedFile",
    "ManagedFileSet",
    "ModrinthSource",
    "PathSource",
    "SOURCE_VARIANTS",
    "Side",
    "SlugReleasesSource",
    "SlugSource",
    "Source",
    "SourceField",
    "UrlSource",
]
