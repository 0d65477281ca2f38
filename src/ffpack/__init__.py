"""
ffpack - Modpack manifest types for Minecraft.
"""

from .core import Loader, ManagedFile, ManagedFileSet, MinecraftVersion, Pack

__version__ = "0.1.0"

__all__ = ["Pack", "MinecraftVersion", "Loader", "ManagedFile", "ManagedFileSet"]
