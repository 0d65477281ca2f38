"""Tests for the pack aggregate and its metadata."""

import json

import pytest
from pydantic import ValidationError
import semver

from ffpack.core import (
    Loader,
    ManagedFile,
    ManagedFileSet,
    Metadata,
    ModrinthSource,
    Pack,
    Release,
    Snapshot,
    Versions,
)

DEFAULT_PACK = {
    "metadata": {
        "name": "My super cool modpack!",
        "description": "Totally a real mod pack!",
        "author": "Your name here!",
        "version": "0.0.1",
    },
    "versions": {
        "minecraft": {"type": "Release", "major": 1, "minor": 19},
        "loader": {"loader": "Quilt", "version": "0.17.1-beta.3"},
    },
    "managed_files": [
        {
            "name": "My totally awesome mode",
            "description": "It makes trees blue",
            "filename": "My Awesome Mod.jar",
            "devel": True,
            "path": "mods/MyAwesomeMod.jar",
            "side": "Both",
            "source": {
                "Url": {
                    "url": "https://example.org/mods/MyAwesomeMod-1.2.3.jar",
                    "blake3": "0" * 64,
                }
            },
        }
    ],
}


def modrinth_file(path: str, slug: str) -> ManagedFile:
    return ManagedFile(filename=f"{slug}.jar", devel=False, path=path, source=ModrinthSource(slug=slug))


class TestDefaults:
    """Test the scaffold values."""

    def test_default_pack_document(self) -> None:
        """Test the full scaffold document."""
        assert json.loads(Pack.default().to_json()) == DEFAULT_PACK

    def test_pretty_printing(self) -> None:
        """Test two-space indentation and declaration key order."""
        text = Pack.default().to_json()
        assert text.startswith('{\n  "metadata": {\n    "name": "My super cool modpack!",\n')
        assert list(json.loads(text)) == ["metadata", "versions", "managed_files"]

    def test_default_versions(self) -> None:
        """Test the default compatibility pair."""
        versions = Versions.default()
        assert versions.minecraft == Release(major=1, minor=19)
        assert versions.loader == Loader.quilt("0.17.1-beta.3")


class TestMetadata:
    """Test pack metadata."""

    def test_description_is_optional(self) -> None:
        """Test that an absent description is left out."""
        metadata = Metadata(name="Pack", author="Someone", version="1.2.3")
        assert metadata.model_dump(mode="json") == {"name": "Pack", "author": "Someone", "version": "1.2.3"}
        assert metadata.version == semver.Version(1, 2, 3)

    def test_rejects_bad_version(self) -> None:
        """Test that the pack version must be semantic."""
        with pytest.raises(ValidationError):
            Metadata(name="Pack", author="Someone", version="one")

    def test_name_and_author_required(self) -> None:
        """Test that there are no fallbacks for required fields."""
        with pytest.raises(ValidationError):
            Metadata.model_validate({"version": "1.0.0"})


class TestPack:
    """Test the aggregate root."""

    def test_round_trip(self) -> None:
        """Test that a serialized pack loads back to an equal value."""
        pack = Pack.default()
        assert Pack.from_json(pack.to_json()) == pack

    def test_managed_files_sorted_and_unique(self) -> None:
        """Test that duplicate paths collapse and files serialize in path order."""
        document = json.loads(json.dumps(DEFAULT_PACK))
        document["managed_files"] = [
            modrinth_file("mods/sodium.jar", "sodium").model_dump(mode="json"),
            modrinth_file("mods/iris.jar", "iris").model_dump(mode="json"),
            modrinth_file("mods/sodium.jar", "sodium-extra").model_dump(mode="json"),
        ]
        pack = Pack.from_json(json.dumps(document))
        assert len(pack.managed_files) == 2
        assert pack.managed_files.get("mods/sodium.jar").source == ModrinthSource(slug="sodium-extra")

        dumped = json.loads(pack.to_json())["managed_files"]
        assert [file["path"] for file in dumped] == ["mods/iris.jar", "mods/sodium.jar"]

    def test_same_path_different_filename(self) -> None:
        """Test that two files sharing a path produce a single slot."""
        pack = Pack(
            metadata=Metadata.default(),
            versions=Versions.default(),
            managed_files=[
                ManagedFile(filename="a.jar", devel=False, path="mods/mod.jar", source=ModrinthSource(slug="a")),
                ManagedFile(filename="b.jar", devel=False, path="mods/mod.jar", source=ModrinthSource(slug="a")),
            ],
        )
        assert isinstance(pack.managed_files, ManagedFileSet)
        assert len(pack.managed_files) == 1

    def test_in_place_mutation(self) -> None:
        """Test that the file set can be changed on an existing pack."""
        pack = Pack.default()
        pack.managed_files.add(modrinth_file("mods/a.jar", "a"))
        pack.versions.minecraft = Snapshot(year=22, week=28, specifier="a")
        dumped = json.loads(pack.to_json())
        assert [file["path"] for file in dumped["managed_files"]] == ["mods/MyAwesomeMod.jar", "mods/a.jar"]
        assert dumped["versions"]["minecraft"]["type"] == "Snapshot"

    def test_missing_managed_files(self) -> None:
        """Test that a manifest without files loads as an empty set."""
        document = {key: value for key, value in DEFAULT_PACK.items() if key != "managed_files"}
        pack = Pack.from_json(json.dumps(document))
        assert len(pack.managed_files) == 0
        assert json.loads(pack.to_json())["managed_files"] == []

    def test_bare_minecraft_string(self) -> None:
        """Test that a bare Minecraft version string is accepted on load."""
        document = json.loads(json.dumps(DEFAULT_PACK))
        document["versions"]["minecraft"] = "22w28b"
        pack = Pack.from_json(json.dumps(document))
        assert pack.versions.minecraft == Snapshot(year=22, week=28, specifier="b")

    @pytest.mark.parametrize(
        ("pointer", "value"),
        [
            (("versions", "minecraft"), {"type": "Release", "major": 99999, "minor": 0}),
            (("versions", "minecraft"), "99999.0"),
            (("versions", "loader"), {"loader": "Quilt", "version": "not-semver"}),
            (("metadata", "version"), "0.1"),
        ],
    )
    def test_one_bad_field_fails_the_document(self, pointer: tuple[str, str], value) -> None:
        """Test that a single invalid field rejects the whole manifest."""
        document = json.loads(json.dumps(DEFAULT_PACK))
        document[pointer[0]][pointer[1]] = value
        with pytest.raises(ValidationError):
            Pack.from_json(json.dumps(document))

    def test_bad_digest_fails_the_document(self) -> None:
        """Test that a truncated digest rejects the whole manifest."""
        document = json.loads(json.dumps(DEFAULT_PACK))
        document["managed_files"][0]["source"]["Url"]["blake3"] = "0" * 63
        with pytest.raises(ValidationError):
            Pack.from_json(json.dumps(document))
