from .files import (
    SOURCE_VARIANTS,
    CurseforgeSource,
    GitSource,
    ManagedFile,
    ManagedFileSet,
    ModrinthSource,
    PathSource,
    Side,
    SlugReleasesSource,
    SlugSource,
    Source,
    UrlSource,
)
from .loader import Loader, LoaderKind
from .minecraft import (
    InvalidComponent,
    MinecraftVersion,
    MinecraftVersionError,
    NoSupportedPattern,
    Release,
    Snapshot,
    parse_minecraft_version,
)
from .models import Metadata, Pack, Versions

__all__ = [
    "Pack",
    "Metadata",
    "Versions",
    "MinecraftVersion",
    "Release",
    "Snapshot",
    "parse_minecraft_version",
    "MinecraftVersionError",
    "NoSupportedPattern",
    "InvalidComponent",
    "Loader",
    "LoaderKind",
    "Side",
    "Source",
    "SOURCE_VARIANTS",
    "UrlSource",
    "PathSource",
    "GitSource",
    "SlugSource",
    "SlugReleasesSource",
    "ModrinthSource",
    "CurseforgeSource",
    "ManagedFile",
    "ManagedFileSet",
]
