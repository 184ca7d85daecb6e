"""Loading of the first mesh primitive from glTF 2.0 files (.gltf and .glb)."""

from __future__ import annotations

import base64
import enum
import json
import struct
from pathlib import Path
from urllib.parse import unquote

import numpy as np

from .geometry import Mesh, Vertex


class MeshType(enum.IntFlag):
    """How ``load_mesh`` interprets its source."""

    ASCII = 1
    BINARY = 2
    FILE = 4
    MEMORY = 8


class MeshLoadError(Exception):
    """Raised when a glTF document cannot be read or holds no usable mesh."""


_GLB_MAGIC = b"glTF"
_GLB_VERSION = 2
_CHUNK_JSON = 0x4E4F534A
_CHUNK_BIN = 0x004E4942
_HEADER = struct.Struct("<4sII")
_CHUNK_HEADER = struct.Struct("<II")

_COMPONENT_DTYPES = {
    5120: np.dtype("i1"),
    5121: np.dtype("u1"),
    5122: np.dtype("<i2"),
    5123: np.dtype("<u2"),
    5125: np.dtype("<u4"),
    5126: np.dtype("<f4"),
}
_INDEX_COMPONENT_TYPES = {5121, 5123, 5125}
_FLOAT = _COMPONENT_DTYPES[5126]


def parse_glb(data) -> tuple[dict, list[bytes]]:
    """Parse binary glTF, returning the JSON document and its buffers."""
    return _parse_glb(bytes(data), Path("."))


def parse_gltf(text, base_dir) -> tuple[dict, list[bytes]]:
    """Parse JSON glTF, resolving external buffers relative to ``base_dir``."""
    document = _decode_json(text)
    return document, _load_buffers(document, Path(base_dir), None)


def load_mesh(source, mesh_type=MeshType.BINARY | MeshType.FILE) -> Mesh:
    """Load the first primitive of the first mesh in a glTF source."""
    mesh_type = MeshType(mesh_type)
    from_file = MeshType.FILE in mesh_type
    label = str(source) if from_file else "<memory>"
    try:
        if from_file:
            path = Path(source)
            raw = path.read_bytes()
            if MeshType.ASCII in mesh_type:
                document, buffers = parse_gltf(raw, path.parent)
            else:
                document, buffers = _parse_glb(raw, path.parent)
        elif MeshType.ASCII in mesh_type:
            document, buffers = parse_gltf(source, ".")
        else:
            document, buffers = parse_glb(source)
    except OSError as exc:
        raise MeshLoadError(f"Failed to load GLTF file {label}: {exc}") from exc
    except MeshLoadError as exc:
        raise MeshLoadError(f"Failed to load GLTF file {label}: {exc}") from exc
    return _build_mesh(document, buffers, label)


def _parse_glb(data: bytes, base_dir: Path) -> tuple[dict, list[bytes]]:
    if len(data) < _HEADER.size:
        raise MeshLoadError("GLB data is too short")
    magic, version, length = _HEADER.unpack_from(data)
    if magic != _GLB_MAGIC:
        raise MeshLoadError("invalid GLB magic")
    if version != _GLB_VERSION:
        raise MeshLoadError(f"unsupported GLB version {version}")
    if length > len(data):
        raise MeshLoadError("GLB data is truncated")

    chunks = list(_iter_chunks(data[:length]))
    if not chunks or chunks[0][0] != _CHUNK_JSON:
        raise MeshLoadError("GLB does not start with a JSON chunk")
    document = _decode_json(chunks[0][1])
    binary = next((payload for kind, payload in chunks[1:] if kind == _CHUNK_BIN), None)
    return document, _load_buffers(document, base_dir, binary)


def _iter_chunks(data: bytes):
    offset = _HEADER.size
    while offset < len(data):
        if offset + _CHUNK_HEADER.size > len(data):
            raise MeshLoadError("GLB chunk header is truncated")
        size, kind = _CHUNK_HEADER.unpack_from(data, offset)
        start = offset + _CHUNK_HEADER.size
        end = start + size
        if end > len(data):
            raise MeshLoadError("GLB chunk is truncated")
        yield kind, data[start:end]
        offset = end


def _decode_json(raw) -> dict:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        raw = bytes(raw)
    try:
        document = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise MeshLoadError(f"invalid glTF JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise MeshLoadError("glTF document must be a JSON object")
    return document


def _load_buffers(document: dict, base_dir: Path, binary: bytes | None) -> list[bytes]:
    buffers = []
    for index, spec in enumerate(document.get("buffers", [])):
        uri = spec.get("uri")
        if uri is None:
            if index != 0 or binary is None:
                raise MeshLoadError(f"buffer {index} has no data")
            data = binary
        elif uri.startswith("data:"):
            data = _decode_data_uri(uri)
        else:
            path = base_dir / unquote(uri)
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise MeshLoadError(f"cannot read buffer {path}: {exc}") from exc
        byte_length = spec.get("byteLength", len(data))
        if len(data) < byte_length:
            raise MeshLoadError(f"buffer {index} is shorter than its byteLength")
        buffers.append(data[:byte_length])
    return buffers


def _decode_data_uri(uri: str) -> bytes:
    header, sep, payload = uri.partition(",")
    if not sep or not header.endswith(";base64"):
        raise MeshLoadError("only base64 data URIs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as exc:
        raise MeshLoadError(f"invalid base64 data URI: {exc}") from exc


def _lookup(items: list, index, what: str):
    if not isinstance(index, int) or not 0 <= index < len(items):
        raise MeshLoadError(f"{what} index {index} is out of range")
    return items[index]


def _read_accessor(document: dict, buffers: list[bytes], index, components: int,
                   dtype: np.dtype) -> np.ndarray:
    accessor = _lookup(document.get("accessors", []), index, "accessor")
    if "bufferView" not in accessor:
        raise MeshLoadError(f"accessor {index} has no buffer view")
    view = _lookup(document.get("bufferViews", []), accessor["bufferView"], "bufferView")
    buffer = _lookup(buffers, view.get("buffer", 0), "buffer")

    count = accessor.get("count", 0)
    element = dtype.itemsize * components
    stride = view.get("byteStride") or element
    start = view.get("byteOffset", 0) + accessor.get("byteOffset", 0)
    end = start + stride * (count - 1) + element if count else start
    if end > len(buffer):
        raise MeshLoadError(f"accessor {index} reads past the end of its buffer")

    raw = np.frombuffer(buffer, dtype=np.uint8)
    rows = np.lib.stride_tricks.as_strided(
        raw[start:], shape=(count, element), strides=(stride, 1), writeable=False
    )
    return np.ascontiguousarray(rows).view(dtype).reshape(count, components)


def _optional_attribute(document, buffers, attributes, name, components, count):
    if name not in attributes:
        return None
    values = _read_accessor(document, buffers, attributes[name], components, _FLOAT)
    if len(values) < count:
        raise MeshLoadError(f"attribute {name} has fewer elements than POSITION")
    return [tuple(row) for row in values[:count].tolist()]


def _build_mesh(document: dict, buffers: list[bytes], label: str) -> Mesh:
    meshes = document.get("meshes") or []
    if not meshes:
        raise MeshLoadError(f"No Meshes Found in GLTF file {label}")
    primitives = meshes[0].get("primitives") or []
    if not primitives:
        raise MeshLoadError(f"No primitives in the first mesh of GLTF file {label}")
    primitive = primitives[0]
    attributes = primitive.get("attributes", {})
    if "POSITION" not in attributes:
        raise MeshLoadError(f"No POSITION attribute in GLTF file {label}")

    positions = _read_accessor(document, buffers, attributes["POSITION"], 3, _FLOAT).tolist()
    count = len(positions)
    normals = _optional_attribute(document, buffers, attributes, "NORMAL", 3, count)
    uvs = _optional_attribute(document, buffers, attributes, "TEXCOORD_0", 2, count)

    mesh = Mesh()
    for i, position in enumerate(positions):
        vertex = Vertex(position=tuple(position))
        if normals is not None:
            vertex.normal = normals[i]
        if uvs is not None:
            vertex.uv = uvs[i]
        mesh.vertices.append(vertex)

    index_accessor = primitive.get("indices")
    if index_accessor is not None and index_accessor >= 0:
        accessor = _lookup(document.get("accessors", []), index_accessor, "accessor")
        component = accessor.get("componentType")
        if component not in _INDEX_COMPONENT_TYPES:
            raise MeshLoadError(f"unsupported index component type {component}")
        indices = _read_accessor(document, buffers, index_accessor, 1,
                                 _COMPONENT_DTYPES[component])
        mesh.indices = [int(i) for i in indices.reshape(-1).tolist()]
    return mesh