import numpy as np
import pytest

from emberengine.geometry import Mesh, Shader, Vertex
from emberengine.gl_device import (
    CLEAR_COLOR,
    VERTEX_ATTRIBUTES,
    VERTEX_STRIDE,
    GLRenderingDevice,
    GLRenderObject,
    pack_indices,
    pack_vertices,
)
from emberengine.transforms import translate


class FakeGL:
    def __init__(self, compile_ok=True, link_ok=True, context=True):
        self.calls = []
        self.compile_ok = compile_ok
        self.link_ok = link_ok
        self.context = context
        self._next = 100

    def _handle(self):
        self._next += 1
        return self._next

    def ensure_context(self):
        if not self.context:
            raise RuntimeError("no context")
        self.calls.append(("ensure_context",))

    def enable_depth_test(self):
        self.calls.append(("enable_depth_test",))

    def clear(self, color):
        self.calls.append(("clear", tuple(color)))

    def gen_vertex_array(self):
        handle = self._handle()
        self.calls.append(("gen_vertex_array", handle))
        return handle

    def bind_vertex_array(self, vao):
        self.calls.append(("bind_vertex_array", vao))

    def gen_buffer(self):
        handle = self._handle()
        self.calls.append(("gen_buffer", handle))
        return handle

    def buffer_data(self, target, buffer, data):
        self.calls.append(("buffer_data", target, buffer, data))

    def vertex_attribute(self, index, size, stride, offset):
        self.calls.append(("vertex_attribute", index, size, stride, offset))

    def use_program(self, program):
        self.calls.append(("use_program", program))

    def draw_elements(self, count):
        self.calls.append(("draw_elements", count))

    def compile_shader(self, stage, source):
        handle = self._handle()
        self.calls.append(("compile_shader", stage, source, handle))
        return handle, self.compile_ok, "" if self.compile_ok else f"{stage} log"

    def link_program(self, shaders):
        handle = self._handle()
        self.calls.append(("link_program", tuple(shaders), handle))
        return handle, self.link_ok, "" if self.link_ok else "link log"

    def delete_shader(self, shader):
        self.calls.append(("delete_shader", shader))

    def delete_program(self, program):
        self.calls.append(("delete_program", program))

    def delete_vertex_array(self, vao):
        self.calls.append(("delete_vertex_array", vao))

    def delete_buffer(self, buffer):
        self.calls.append(("delete_buffer", buffer))

    def set_uniform(self, program, name, kind, values):
        self.calls.append(("set_uniform", program, name, kind, tuple(values)))

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


def _mesh():
    return Mesh(
        vertices=[
            Vertex((0.0, 1.0, 2.0), (0.0, 0.0, 1.0), (0.5, 0.25)),
            Vertex((3.0, 4.0, 5.0), (1.0, 0.0, 0.0), (1.0, 0.0)),
            Vertex((6.0, 7.0, 8.0), (0.0, 1.0, 0.0), (0.0, 1.0)),
        ],
        indices=[0, 1, 2],
    )


def test_pack_vertices_round_trip():
    mesh = _mesh()
    data = np.frombuffer(pack_vertices(mesh.vertices), dtype=np.float32).reshape(-1, 8)
    expected = [(*v.position, *v.normal, *v.uv) for v in mesh.vertices]
    assert data.tolist() == expected


def test_pack_vertices_stride_matches_layout():
    assert len(pack_vertices([Vertex()])) == VERTEX_STRIDE
    assert pack_vertices([]) == b""


def test_pack_indices_round_trip():
    indices = [0, 1, 2, 2, 3, 0, 65536]
    assert np.frombuffer(pack_indices(indices), dtype=np.uint32).tolist() == indices


def test_create_object_uploads_mesh():
    gl = FakeGL()
    device = GLRenderingDevice(gl)
    mesh = _mesh()
    obj = device.create_object(mesh)

    assert isinstance(obj, GLRenderObject)
    assert obj.index_count == len(mesh.indices)
    uploads = gl.named("buffer_data")
    assert uploads == [
        ("buffer_data", "array", obj.vbo, pack_vertices(mesh.vertices)),
        ("buffer_data", "element", obj.ebo, pack_indices(mesh.indices)),
    ]
    assert ("bind_vertex_array", obj.vao) in gl.calls
    assert len({obj.vao, obj.vbo, obj.ebo}) == 3


def test_create_object_declares_vertex_layout():
    gl = FakeGL()
    GLRenderingDevice(gl).create_object(_mesh())
    expected = [("vertex_attribute", i, size, VERTEX_STRIDE, offset)
                for i, size, offset in VERTEX_ATTRIBUTES]
    assert gl.named("vertex_attribute") == expected


def test_draw_binds_and_draws_all_indices():
    gl = FakeGL()
    device = GLRenderingDevice(gl)
    obj = GLRenderObject(vao=7, vbo=8, ebo=9, index_count=36)
    device.draw(obj, Shader(internal=5))
    assert gl.calls == [("bind_vertex_array", 7), ("use_program", 5), ("draw_elements", 36)]


def test_compile_shader_links_and_stores_program():
    gl = FakeGL()
    device = GLRenderingDevice(gl)
    shader = Shader(vertex_shader="vs source", fragment_shader="fs source")
    device.compile_shader(shader)

    compiled = gl.named("compile_shader")
    assert [(c[1], c[2]) for c in compiled] == [("vertex", "vs source"), ("fragment", "fs source")]
    link = gl.named("link_program")[0]
    assert link[1] == (compiled[0][3], compiled[1][3])
    assert shader.internal == link[2]
    assert gl.named("delete_shader") == [("delete_shader", compiled[0][3]),
                                         ("delete_shader", compiled[1][3])]


def test_compile_failure_is_reported(capsys):
    gl = FakeGL(compile_ok=False, link_ok=False)
    shader = Shader(vertex_shader="bad", fragment_shader="bad")
    GLRenderingDevice(gl).compile_shader(shader)
    out = capsys.readouterr()
    assert "GL_COMPILE_STATUS > VERTEX" in out.err
    assert "GL_COMPILE_STATUS > FRAGMENT" in out.err
    assert "GL_LINK_STATUS" in out.err
    assert "vertex log" in out.out
    assert "link log" in out.out


def test_set_shader_mat4_is_column_major():
    gl = FakeGL()
    device = GLRenderingDevice(gl)
    matrix = translate(np.identity(4), (1.0, 2.0, 3.0))
    device.set_shader_mat4(Shader(internal=3), "u_model", matrix)
    call = gl.named("set_uniform")[0]
    assert call[1:4] == (3, "u_model", "mat4")
    assert call[4][12:] == (1.0, 2.0, 3.0, 1.0)
    assert ("use_program", 3) in gl.calls


def test_set_shader_mat4_rejects_wrong_shape():
    with pytest.raises(ValueError):
        GLRenderingDevice(FakeGL()).set_shader_mat4(Shader(internal=1), "m", np.identity(3))


def test_set_shader_vectors_and_scalars():
    gl = FakeGL()
    device = GLRenderingDevice(gl)
    shader = Shader(internal=4)
    device.set_shader_vec2(shader, "a", (1, 2))
    device.set_shader_vec3(shader, "b", np.array([1.0, 2.0, 3.0]))
    device.set_shader_vec4(shader, "c", [1, 2, 3, 4])
    device.set_shader_float(shader, "d", 0.5)
    device.set_shader_int(shader, "e", 3)
    assert gl.named("set_uniform") == [
        ("set_uniform", 4, "a", "2f", (1.0, 2.0)),
        ("set_uniform", 4, "b", "3f", (1.0, 2.0, 3.0)),
        ("set_uniform", 4, "c", "4f", (1.0, 2.0, 3.0, 4.0)),
        ("set_uniform", 4, "d", "1f", (0.5,)),
        ("set_uniform", 4, "e", "1f", (3.0,)),
    ]


def test_set_shader_vec3_rejects_wrong_size():
    with pytest.raises(ValueError):
        GLRenderingDevice(FakeGL()).set_shader_vec3(Shader(internal=1), "v", (1.0, 2.0))


def test_shutdown_object_deletes_handles():
    gl = FakeGL()
    GLRenderingDevice(gl).shutdown_object(GLRenderObject(vao=1, vbo=2, ebo=3, index_count=0))
    assert gl.calls == [("delete_vertex_array", 1), ("delete_buffer", 2), ("delete_buffer", 3)]


def test_shutdown_shader_deletes_program():
    gl = FakeGL()
    GLRenderingDevice(gl).shutdown_shader(Shader(internal=11))
    assert gl.calls == [("delete_program", 11)]


def test_bind_shader_uses_program():
    gl = FakeGL()
    GLRenderingDevice(gl).bind_shader(Shader(internal=12))
    assert gl.calls == [("use_program", 12)]


def test_initialize_enables_depth_test():
    gl = FakeGL()
    GLRenderingDevice(gl).initialize()
    assert gl.calls == [("ensure_context",), ("enable_depth_test",)]


def test_initialize_without_context_fails(capsys):
    gl = FakeGL(context=False)
    with pytest.raises(RuntimeError):
        GLRenderingDevice(gl).initialize()
    assert "OpenGL failed to init" in capsys.readouterr().err
    assert gl.named("enable_depth_test") == []


def test_begin_frame_clears_with_background_colour():
    gl = FakeGL()
    GLRenderingDevice(gl).begin_frame()
    assert gl.calls == [("clear", CLEAR_COLOR)]
    assert CLEAR_COLOR == (0.2, 0.3, 0.7, 1.0)