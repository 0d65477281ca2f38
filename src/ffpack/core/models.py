from pydantic import Field

from ffpack.core.files import ManagedFile, ManagedFileSet
from ffpack.core.loader import Loader
from ffpack.core.minecraft import Minecraft, default_minecraft_version
from ffpack.core.types import ManifestModel, SemVer


class Metadata(ManifestModel):
    name: str
    description: str | None = None
    author: str
    version: SemVer

    @classmethod
    def default(cls) -> "Metadata":
        return cls(
            name="My super cool modpack!",
            description="Totally a real mod pack!",
            author="Your name here!",
            version="0.0.1",
        )


class Versions(ManifestModel):
    """The Minecraft version and loader this pack works with"""

    minecraft: Minecraft
    loader: Loader

    @classmethod
    def default(cls) -> "Versions":
        return cls(minecraft=default_minecraft_version(), loader=Loader.default())


class Pack(ManifestModel):
    """
    High level representation of a modpack manifest.

    ``managed_files`` is unique by path and always iterates (and
    serializes) in ascending path order.
    """

    metadata: Metadata
    versions: Versions
    managed_files: ManagedFileSet = Field(default_factory=ManagedFileSet)

    @classmethod
    def default(cls) -> "Pack":
        """Scaffold for a new manifest, with placeholder values throughout"""
        return cls(
            metadata=Metadata.default(),
            versions=Versions.default(),
            managed_files=ManagedFileSet([ManagedFile.default()]),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Pack":
        return cls.model_validate_json(text)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


__all__ = ["Metadata", "Pack", "Versions"]
