"""Scene readers: adapters from scene files to :class:`SceneGraph`."""

from scenejsx.readers.gltf import read_gltf

__all__ = ["read_gltf"]
