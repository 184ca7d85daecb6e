"""Cache of files, meshes and shaders loaded from a folder or a WAD image."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from . import rendering_device
from .geometry import Mesh, Shader
from .mesh_loader import MeshType
from .mesh_loader import load_mesh as _load_mesh_data


class LoadMode(enum.Enum):
    """Where assets come from."""

    NONE = 0
    WAD = 1
    FOLDER = 2


class AssetError(Exception):
    """Raised when an asset cannot be found or the cache is not set up."""


@dataclass
class FileInfo:
    """A known file: its place in the WAD image, or its contents on disk."""

    wad_location: int = 0
    wad_size: int = 0
    data: bytes = b""
    is_loaded: bool = False


class AssetCache:
    """Loads assets once and keeps them by path.

    ``root`` is the folder paths are relative to (the working directory when
    None), ``device`` compiles shaders (the process-wide rendering device when
    None) and ``wad_data`` is the image WAD entries point into.
    """

    _instance = None

    def __init__(self, root=None, device=None, wad_data=b""):
        self.root = None if root is None else Path(root)
        self.device = device
        self.wad_data = bytes(wad_data)
        self.meshes: dict[str, Mesh] = {}
        self.shaders: dict[str, Shader] = {}
        self.files: dict[str, FileInfo] = {}
        self._mode = LoadMode.NONE

    @property
    def mode(self) -> LoadMode:
        return self._mode

    @mode.setter
    def mode(self, mode) -> None:
        if self._mode is not LoadMode.NONE:
            raise AssetError("Load mode already set")
        self._mode = LoadMode(mode)

    @classmethod
    def get_instance(cls) -> AssetCache:
        """Return the process-wide cache, creating it on first use."""
        if AssetCache._instance is None:
            AssetCache._instance = cls()
        return AssetCache._instance

    def _resolve(self, path) -> Path:
        base = self.root if self.root is not None else Path.cwd()
        return base / Path(path)

    def _renderer(self):
        device = self.device if self.device is not None else rendering_device.get_instance()
        if device is None:
            raise RuntimeError("no rendering device has been created")
        return device

    def _require_mode(self) -> LoadMode:
        if self._mode is LoadMode.NONE:
            raise AssetError("load mode is none, set the mode before loading files")
        return self._mode

    def _wad_slice(self, path: str) -> bytes:
        info = self.files[path]
        return self.wad_data[info.wad_location:info.wad_location + info.wad_size]

    def _read_file(self, path: str) -> None:
        try:
            data = self._resolve(path).read_bytes()
        except OSError as exc:
            raise AssetError("Failed to open file") from exc
        info = self.files.setdefault(path, FileInfo())
        info.data = data
        info.is_loaded = True

    def load_file(self, path) -> bytes:
        """Return the contents of a known file."""
        mode = self._require_mode()
        if path not in self.files:
            raise AssetError(f"File not found : {path}")
        if mode is LoadMode.WAD:
            return self._wad_slice(path)
        if not self.files[path].is_loaded:
            self._read_file(path)
        return self.files[path].data

    def load_mesh(self, path) -> Mesh:
        """Load a glTF mesh (binary when the name ends in .glb) and cache it."""
        mode = self._require_mode()
        kind = MeshType.BINARY if Path(path).suffix == ".glb" else MeshType.ASCII
        if mode is LoadMode.WAD:
            if path not in self.files:
                raise AssetError(f"File not found : {path}")
            mesh = _load_mesh_data(self._wad_slice(path), kind | MeshType.MEMORY)
        else:
            full = self._resolve(path)
            if not full.exists():
                raise AssetError(f"File not found : {full}")
            info = self.files.get(path)
            if info is None or not info.is_loaded:
                self._read_file(path)
            mesh = _load_mesh_data(full, kind | MeshType.FILE)
        self.meshes[path] = mesh
        return mesh

    def load_shader(self, vertex_path, fragment_path, shader_path) -> Shader:
        """Load and compile a shader from two source files, kept as ``shader_path``."""
        mode = self._require_mode()
        if mode is LoadMode.WAD:
            if vertex_path not in self.files or fragment_path not in self.files:
                raise AssetError(f"File not found : {vertex_path} and {fragment_path}")
            vertex = self._wad_slice(vertex_path)
            fragment = self._wad_slice(fragment_path)
        else:
            if not (self._resolve(vertex_path).exists()
                    and self._resolve(fragment_path).exists()):
                raise AssetError(
                    f"File not found : {Path(vertex_path)} and {Path(fragment_path)}"
                )
            self._read_file(vertex_path)
            self._read_file(fragment_path)
            vertex = self.files[vertex_path].data
            fragment = self.files[fragment_path].data

        shader = self.shaders.setdefault(shader_path, Shader())
        shader.vertex_shader = vertex.decode("utf-8")
        shader.fragment_shader = fragment.decode("utf-8")
        shader.name = shader_path
        self._renderer().compile_shader(shader)
        return shader