"""
Geometry assemblers: buffers, buffer views, accessors and meshes.
"""

from __future__ import annotations

from typing import Any

from .. import tables
from ..elements import FLOAT, INTEGER, STRING, Array, ElementParser, Entity, Mapping, registry
from ..model import (
    Accessor,
    Buffer,
    BufferType,
    BufferView,
    BufferViewTarget,
    Mesh,
    Primitive,
    PrimitiveMode,
)


@registry.register(Buffer)
def parse_buffer(p: ElementParser, obj: Any, path: str) -> Buffer:
    uri = p.required(obj, "uri", path, STRING)
    byte_length = p.optional(obj, "byteLength", path, INTEGER, 0)
    buffer_type = p.optional_mapped(obj, "type", path, STRING, tables.BUFFER_TYPES, BufferType.ARRAY_BUFFER)
    return Buffer(uri=uri, byte_length=byte_length, type=buffer_type)


@registry.register(BufferView)
def parse_buffer_view(p: ElementParser, obj: Any, path: str) -> BufferView:
    buffer = p.required(obj, "buffer", path, STRING)
    byte_offset = p.required(obj, "byteOffset", path, INTEGER)
    byte_length = p.optional(obj, "byteLength", path, INTEGER, 0)
    target = p.optional_mapped(
        obj, "target", path, INTEGER, tables.BUFFER_VIEW_TARGETS, BufferViewTarget.OTHER
    )
    return BufferView(buffer=buffer, byte_offset=byte_offset, byte_length=byte_length, target=target)


@registry.register(Accessor)
def parse_accessor(p: ElementParser, obj: Any, path: str) -> Accessor:
    buffer_view = p.required(obj, "bufferView", path, STRING)
    byte_offset = p.required(obj, "byteOffset", path, INTEGER)
    component_type = p.required_mapped(obj, "componentType", path, INTEGER, tables.COMPONENT_TYPES)
    accessor_type = p.required_mapped(obj, "type", path, STRING, tables.ACCESSOR_TYPES)
    count = p.required(obj, "count", path, INTEGER)
    byte_stride = p.optional(obj, "byteStride", path, INTEGER, 0)
    min_values = p.optional(obj, "min", path, Array(FLOAT), [])
    max_values = p.optional(obj, "max", path, Array(FLOAT), [])
    return Accessor(
        buffer_view=buffer_view,
        byte_offset=byte_offset,
        component_type=component_type,
        type=accessor_type,
        count=count,
        byte_stride=byte_stride,
        min=min_values,
        max=max_values,
    )


@registry.register(Primitive)
def parse_primitive(p: ElementParser, obj: Any, path: str) -> Primitive:
    attributes = p.optional(obj, "attributes", path, Mapping(STRING), {})
    indices = p.optional(obj, "indices", path, STRING, "")
    material = p.required(obj, "material", path, STRING)
    mode = p.optional_mapped(obj, "mode", path, INTEGER, tables.PRIMITIVE_MODES, PrimitiveMode.TRIANGLES)
    return Primitive(material=material, attributes=attributes, indices=indices, mode=mode)


@registry.register(Mesh)
def parse_mesh(p: ElementParser, obj: Any, path: str) -> Mesh:
    primitives = p.optional(obj, "primitives", path, Array(Entity(Primitive)), [])
    return Mesh(primitives=primitives)
