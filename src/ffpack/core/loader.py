"""
Mod loaders and their versions.
"""

from enum import Enum

from pydantic import ConfigDict
import semver

from ffpack.core.types import ManifestModel, OrderedByKey, SemVer, optional_key


class LoaderKind(str, Enum):
    """Supported loaders, in ordering precedence (Quilt < Fabric < Forge)."""

    QUILT = "Quilt"
    FABRIC = "Fabric"
    FORGE = "Forge"

    @property
    def ordinal(self) -> int:
        return list(LoaderKind).index(self)


class Loader(OrderedByKey, ManifestModel):
    """
    A loader paired with its version.

    Serialized as ``{"loader": "Quilt", "version": "0.17.1-beta.3"}``.
    Ordered by kind first, then by SemVer precedence, with build metadata
    breaking ties. Two loaders are equal only when kind and version text
    both match, so ``1.0.0+a`` and ``1.0.0+b`` differ.
    """

    model_config = ConfigDict(frozen=True)

    loader: LoaderKind
    version: SemVer

    @classmethod
    def quilt(cls, version: semver.Version | str) -> "Loader":
        """A version of the Quilt loader (https://quiltmc.org/)"""
        return cls(loader=LoaderKind.QUILT, version=version)

    @classmethod
    def fabric(cls, version: semver.Version | str) -> "Loader":
        """A version of the Fabric loader (https://fabricmc.net/)"""
        return cls(loader=LoaderKind.FABRIC, version=version)

    @classmethod
    def forge(cls, version: semver.Version | str) -> "Loader":
        """A version of the Forge loader (https://forums.minecraftforge.net/)"""
        return cls(loader=LoaderKind.FORGE, version=version)

    @classmethod
    def default(cls) -> "Loader":
        return cls.quilt("0.17.1-beta.3")

    @property
    def name(self) -> str:
        return self.loader.value

    def _sort_key(self) -> tuple:
        return (self.loader.ordinal, self.version, optional_key(self.version.build))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Loader):
            return NotImplemented
        return self.loader is other.loader and str(self.version) == str(other.version)

    def __hash__(self) -> int:
        return hash((self.loader, str(self.version)))

    def __str__(self) -> str:
        return f"{self.name}: {self.version}"


__all__ = ["Loader", "LoaderKind"]
