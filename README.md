# emberengine

A small 3D engine with a minimal editor loop, built on numpy and pyglet.

## What it provides

- **glTF 2.0 mesh loading** (`emberengine.mesh_loader`): `load_mesh` reads the
  first primitive of the first mesh from a `.glb` or `.gltf` source, either a
  file or data in memory, chosen with the `MeshType` flags (`ASCII`, `BINARY`,
  `FILE`, `MEMORY`). `parse_glb` and `parse_gltf` return the JSON document and
  its buffers. Positions, and optional normals, `TEXCOORD_0` and
  8/16/32-bit unsigned indices are read. External buffer files and base64
  data URIs are supported. Problems raise `MeshLoadError`.
- **Geometry records** (`emberengine.geometry`): the `Vertex`, `Mesh` and
  `Shader` dataclasses.
- **Transforms** (`emberengine.transforms`): `normalize`, `translate`, `scale`,
  `euler_to_matrix`, `model_matrix`, `perspective`, `orthographic` and
  `look_at`. These return 4x4 numpy matrices that act on column vectors.
- **Camera** (`emberengine.camera`): `Camera.process(window)` recomputes the
  projection (`ProjectionMode.PERSPECTIVE` or `ProjectionMode.ORTHOGRAPHIC`),
  the forward/right/up vectors and the view matrix from the window's size and
  the camera's position and rotation in degrees.
- **Scenes** (`emberengine.scene`, `emberengine.scene_object`): a `Scene` holds
  a camera and `SceneObject`s. Each object has a position, a rotation in Euler
  degrees, a scale, a render handle and a shader. `Scene.get_instance()`
  returns a process-wide scene.
- **Rendering devices** (`emberengine.rendering_device`,
  `emberengine.gl_device`): the abstract `RenderingDevice`,
  `create_rendering_device`, `get_instance` and `shutdown_instance`, and
  `GLRenderingDevice`, which draws through pyglet's OpenGL bindings.
  `pack_vertices` and `pack_indices` produce the interleaved buffer layout.
  Asking for `GraphicsApi.VULKAN` raises `UnsupportedApiError`.
- **Windowing** (`emberengine.window`): `Window` opens a centred pyglet window.
  Its `status()` processes events, tracks `width`, `height` and `time`, and
  returns False once the window should close.
- **Asset cache** (`emberengine.asset_cache`): `AssetCache` loads files, meshes
  and shader pairs once and keeps them by path. Set its `mode` to a `LoadMode`
  once before loading. A second assignment raises `AssetError`. In
  `LoadMode.FOLDER` paths are resolved against `root`, which defaults to the
  working directory. In `LoadMode.WAD` entries of `files` (`FileInfo`) point
  into the `wad_data` bytes. Missing files raise `AssetError`.
- **Logging** (`emberengine.log`): `print_message` and `print_warning` write to
  standard output and `print_error` writes to standard error. `print_debug`
  writes only when the `EMBERENGINE_DEBUG` environment variable is set to
  something other than empty or `0`.

## Installation

```
pip install .
```

Running the tests:

```
pip install .[test]
pytest
```

## The editor

```
emberengine-editor [--root FOLDER]
```

The editor does the following:

1. Opens a 1280x720 window titled "Editor".
2. Creates the OpenGL rendering device.
3. Sets the asset cache to folder mode. `--root` sets the folder that holds
   `assets/`; without it, the working directory is used.
4. Compiles two shaders:
   - `core/default` from `assets/default.vs.glsl` and `assets/default.fs.glsl`
   - `core/different_default` from `assets/default.vs.glsl` and
     `assets/different_default.fs.glsl`
5. Loads `assets/sphere.glb`.
6. Draws the mesh spinning in front of a camera at (0, 0, 5) until the window
   is closed.

## Using the library

```python
from emberengine.mesh_loader import MeshType, load_mesh
from emberengine.transforms import model_matrix

mesh = load_mesh("assets/sphere.glb", MeshType.BINARY | MeshType.FILE)
print(len(mesh.vertices), len(mesh.indices))

matrix = model_matrix((0, 0, -5), (0, 45, 0), (1, 1, 1))
point = matrix @ [0.0, 0.0, 0.0, 1.0]
```

## What it does not do

- **No editor panels.** The editor has no scene hierarchy, no inspector, no
  shader picker and no transform gizmos. It only shows the loaded scene.
- **No WAD archive reading.** The asset cache reads from a WAD image only
  through `FileInfo` entries that you add to `files` yourself. It does not
  parse a WAD directory.
- **No Vulkan back end.** OpenGL is the only rendering back end.