"""OpenGL rendering device."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .log import print_error, print_message
from .rendering_device import RenderingDevice

VERTEX_STRIDE = 32
# (attribute index, component count, byte offset) for position, normal and uv.
VERTEX_ATTRIBUTES = ((0, 3, 0), (1, 3, 12), (2, 2, 24))
CLEAR_COLOR = (0.2, 0.3, 0.7, 1.0)


@dataclass
class GLRenderObject:
    """Handles of an uploaded mesh."""

    vao: int
    vbo: int
    ebo: int
    index_count: int


def pack_vertices(vertices) -> bytes:
    """Interleave vertices as eight 32-bit floats: position, normal, uv."""
    rows = [(*v.position, *v.normal, *v.uv) for v in vertices]
    return np.array(rows, dtype=np.float32).reshape(-1, 8).tobytes()


def pack_indices(indices) -> bytes:
    """Pack indices as unsigned 32-bit integers."""
    return np.asarray(list(indices), dtype=np.uint32).tobytes()


class _PygletGL:
    """Thin wrapper over pyglet's OpenGL bindings."""

    def __init__(self):
        from pyglet import gl
        from pyglet.graphics import shader as pyglet_shader

        self._gl = gl
        self._shader_module = pyglet_shader
        self._programs = {}

    def ensure_context(self) -> None:
        if self._gl.current_context is None:
            raise RuntimeError("no current OpenGL context")

    def enable_depth_test(self) -> None:
        self._gl.glEnable(self._gl.GL_DEPTH_TEST)

    def clear(self, color) -> None:
        gl = self._gl
        gl.glClearColor(*color)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

    def gen_vertex_array(self) -> int:
        handle = (self._gl.GLuint * 1)()
        self._gl.glGenVertexArrays(1, handle)
        return int(handle[0])

    def bind_vertex_array(self, vao: int) -> None:
        self._gl.glBindVertexArray(vao)

    def gen_buffer(self) -> int:
        handle = (self._gl.GLuint * 1)()
        self._gl.glGenBuffers(1, handle)
        return int(handle[0])

    def buffer_data(self, target: str, buffer: int, data: bytes) -> None:
        gl = self._gl
        gl_target = gl.GL_ARRAY_BUFFER if target == "array" else gl.GL_ELEMENT_ARRAY_BUFFER
        gl.glBindBuffer(gl_target, buffer)
        payload = (gl.GLubyte * len(data)).from_buffer_copy(data)
        gl.glBufferData(gl_target, len(data), payload, gl.GL_STATIC_DRAW)

    def vertex_attribute(self, index: int, size: int, stride: int, offset: int) -> None:
        gl = self._gl
        gl.glVertexAttribPointer(index, size, gl.GL_FLOAT, gl.GL_FALSE, stride, offset)
        gl.glEnableVertexAttribArray(index)

    def use_program(self, program: int) -> None:
        self._gl.glUseProgram(program)

    def draw_elements(self, count: int) -> None:
        gl = self._gl
        gl.glDrawElements(gl.GL_TRIANGLES, count, gl.GL_UNSIGNED_INT, 0)

    def compile_shader(self, stage: str, source: str):
        try:
            compiled = self._shader_module.Shader(source, stage)
        except self._shader_module.ShaderException as exc:
            return None, False, str(exc)
        return compiled, True, ""

    def link_program(self, shaders):
        if any(shader is None for shader in shaders):
            return 0, False, "a shader stage failed to compile"
        try:
            program = self._shader_module.ShaderProgram(*shaders)
        except self._shader_module.ShaderException as exc:
            return 0, False, str(exc)
        self._programs[program.id] = program
        return program.id, True, ""

    def delete_shader(self, shader) -> None:
        if shader is not None:
            shader.delete()

    def delete_program(self, program: int) -> None:
        owner = self._programs.pop(program, None)
        if owner is not None:
            owner.delete()
        elif program:
            self._gl.glDeleteProgram(program)

    def delete_vertex_array(self, vao: int) -> None:
        self._gl.glDeleteVertexArrays(1, (self._gl.GLuint * 1)(vao))

    def delete_buffer(self, buffer: int) -> None:
        self._gl.glDeleteBuffers(1, (self._gl.GLuint * 1)(buffer))

    def set_uniform(self, program: int, name: str, kind: str, values) -> None:
        gl = self._gl
        encoded = name.encode() + b"\0"
        c_name = (gl.GLchar * len(encoded)).from_buffer_copy(encoded)
        location = gl.glGetUniformLocation(program, c_name)
        if kind == "mat4":
            gl.glUniformMatrix4fv(location, 1, gl.GL_FALSE, (gl.GLfloat * 16)(*values))
        else:
            setter = {
                "1f": gl.glUniform1f,
                "2f": gl.glUniform2f,
                "3f": gl.glUniform3f,
                "4f": gl.glUniform4f,
            }[kind]
            setter(location, *values)


class GLRenderingDevice(RenderingDevice):
    """Rendering device drawing through OpenGL.

    ``gl`` is the binding layer; by default pyglet's OpenGL bindings are used,
    opened on first use.
    """

    def __init__(self, gl=None):
        self._gl = gl

    @property
    def gl(self):
        if self._gl is None:
            self._gl = _PygletGL()
        return self._gl

    def initialize(self) -> None:
        try:
            self.gl.ensure_context()
        except RuntimeError:
            print_error("OpenGL failed to init")
            raise
        self.gl.enable_depth_test()

    def begin_frame(self) -> None:
        self.gl.clear(CLEAR_COLOR)

    def draw(self, render_object, shader) -> None:
        self.gl.bind_vertex_array(render_object.vao)
        self.gl.use_program(shader.internal)
        self.gl.draw_elements(render_object.index_count)

    def create_object(self, mesh) -> GLRenderObject:
        gl = self.gl
        vao = gl.gen_vertex_array()
        gl.bind_vertex_array(vao)
        vbo = gl.gen_buffer()
        ebo = gl.gen_buffer()
        gl.buffer_data("array", vbo, pack_vertices(mesh.vertices))
        gl.buffer_data("element", ebo, pack_indices(mesh.indices))
        for index, size, offset in VERTEX_ATTRIBUTES:
            gl.vertex_attribute(index, size, VERTEX_STRIDE, offset)
        return GLRenderObject(vao=vao, vbo=vbo, ebo=ebo, index_count=len(mesh.indices))

    def compile_shader(self, shader) -> None:
        gl = self.gl
        stages = []
        for stage, source in (("vertex", shader.vertex_shader),
                              ("fragment", shader.fragment_shader)):
            handle, ok, log = gl.compile_shader(stage, source)
            if not ok:
                print_error(f"GL_COMPILE_STATUS > {stage.upper()}")
                print_message(log)
            stages.append(handle)

        program, ok, log = gl.link_program(stages)
        if not ok:
            print_error("GL_LINK_STATUS")
            print_message(log)
        for handle in stages:
            gl.delete_shader(handle)
        shader.internal = program

    def bind_shader(self, shader) -> None:
        self.gl.use_program(shader.internal)

    def _set_uniform(self, shader, name, kind, values) -> None:
        self.gl.use_program(shader.internal)
        self.gl.set_uniform(shader.internal, name, kind, values)

    def set_shader_float(self, shader, name, value) -> None:
        self._set_uniform(shader, name, "1f", (float(value),))

    def set_shader_int(self, shader, name, value) -> None:
        self._set_uniform(shader, name, "1f", (float(value),))

    def set_shader_vec2(self, shader, name, value) -> None:
        self._set_uniform(shader, name, "2f", _components(value, 2))

    def set_shader_vec3(self, shader, name, value) -> None:
        self._set_uniform(shader, name, "3f", _components(value, 3))

    def set_shader_vec4(self, shader, name, value) -> None:
        self._set_uniform(shader, name, "4f", _components(value, 4))

    def set_shader_mat4(self, shader, name, value) -> None:
        matrix = np.asarray(value, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
        # OpenGL expects column-major order.
        self._set_uniform(shader, name, "mat4", tuple(matrix.ravel(order="F").tolist()))

    def shutdown(self) -> None:
        """Nothing to release for OpenGL at device level."""

    def shutdown_object(self, render_object) -> None:
        self.gl.delete_vertex_array(render_object.vao)
        self.gl.delete_buffer(render_object.vbo)
        self.gl.delete_buffer(render_object.ebo)

    def shutdown_shader(self, shader) -> None:
        self.gl.delete_program(shader.internal)


def _components(value, size: int) -> tuple[float, ...]:
    values = tuple(float(v) for v in np.asarray(value, dtype=np.float64).reshape(-1))
    if len(values) != size:
        raise ValueError(f"expected {size} components, got {len(values)}")
    return values