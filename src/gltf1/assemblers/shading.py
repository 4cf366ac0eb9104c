"""
Shading assemblers: shaders, programs, techniques, materials, samplers,
images and textures.

Parameter values are the one place where the target kind is not known up
front: it is inferred from the JSON type of the value, or of the first
element for arrays.
"""

from __future__ import annotations

import logging
from typing import Any

from .. import tables
from ..elements import BOOLEAN, FLOAT, INTEGER, STRING, Array, ElementParser, Entity, Mapping, registry
from ..errors import ElementTypeError
from ..jsontree import MISSING, JsonType, child, json_type
from ..model import (
    FilterType,
    Image,
    Material,
    Parameter,
    ParameterValue,
    ParameterValueType,
    Program,
    Sampler,
    Shader,
    Technique,
    Texture,
    TextureFormat,
    TextureTarget,
    TextureType,
    WrapType,
)

logger = logging.getLogger(__name__)

# JSON type -> (scalar kind, scalar value type, array value type)
_VALUE_KINDS = {
    JsonType.INTEGER: (FLOAT, ParameterValueType.NUMBER, ParameterValueType.NUMBER_ARRAY),
    JsonType.REAL: (FLOAT, ParameterValueType.NUMBER, ParameterValueType.NUMBER_ARRAY),
    JsonType.STRING: (STRING, ParameterValueType.STRING, ParameterValueType.STRING_ARRAY),
    JsonType.BOOLEAN: (BOOLEAN, ParameterValueType.BOOLEAN, ParameterValueType.BOOLEAN_ARRAY),
}


@registry.register(Shader)
def parse_shader(p: ElementParser, obj: Any, path: str) -> Shader:
    uri = p.required(obj, "uri", path, STRING)
    shader_type = p.required_mapped(obj, "type", path, INTEGER, tables.SHADER_TYPES)
    return Shader(uri=uri, type=shader_type)


@registry.register(Program)
def parse_program(p: ElementParser, obj: Any, path: str) -> Program:
    attributes = p.optional(obj, "attributes", path, Array(STRING), [])
    fragment_shader = p.required(obj, "fragmentShader", path, STRING)
    vertex_shader = p.required(obj, "vertexShader", path, STRING)
    return Program(fragment_shader=fragment_shader, vertex_shader=vertex_shader, attributes=attributes)


def _kind_family(value_type: JsonType) -> JsonType:
    # integers and reals are both numbers
    return JsonType.REAL if value_type is JsonType.INTEGER else value_type


@registry.register(ParameterValue)
def parse_parameter_value(p: ElementParser, value: Any, path: str) -> ParameterValue:
    """
    Infer the value kind from the JSON type.

    For arrays only the first element is inspected. A later element of a
    different type is not detected here; it fails when it is converted,
    unless strict_parameter_arrays rejects the mix up front.
    """
    value_type = json_type(value)

    if value_type is JsonType.ARRAY:
        first_type = json_type(value[0]) if value else JsonType.NONE
        if first_type not in _VALUE_KINDS:
            raise ElementTypeError(
                f"Could not parse parameter value element '{path}'. Unsupported array type.", path
            )
        if p.config.strict_parameter_arrays:
            family = _kind_family(first_type)
            if any(_kind_family(json_type(element)) is not family for element in value):
                raise ElementTypeError(
                    f"Could not parse parameter value element '{path}'. Mixed array element types.", path
                )
        kind, _, array_type = _VALUE_KINDS[first_type]
        return ParameterValue(type=array_type, values=p.parse(value, path, Array(kind)))

    if value_type not in _VALUE_KINDS:
        raise ElementTypeError(f"Could not parse parameter value element '{path}'. Unsupported type.", path)
    kind, scalar_type, _ = _VALUE_KINDS[value_type]
    return ParameterValue(type=scalar_type, values=[p.parse(value, path, kind)])


@registry.register(Parameter)
def parse_parameter(p: ElementParser, obj: Any, path: str) -> Parameter:
    node = p.optional(obj, "node", path, STRING, "")
    parameter_type = p.required_mapped(obj, "type", path, INTEGER, tables.PARAMETER_TYPES)
    semantic = p.optional(obj, "semantic", path, STRING, "")
    value = p.optional(obj, "value", path, Entity(ParameterValue))
    return Parameter(type=parameter_type, node=node, semantic=semantic, value=value)


@registry.register(Technique)
def parse_technique(p: ElementParser, obj: Any, path: str) -> Technique:
    parameters = p.optional(obj, "parameters", path, Mapping(Entity(Parameter)), {})
    attributes = p.optional(obj, "attributes", path, Mapping(STRING), {})
    uniforms = p.optional(obj, "uniforms", path, Mapping(STRING), {})
    program = p.required(obj, "program", path, STRING)
    if child(obj, "states") is not MISSING:
        logger.debug("Skipping render states of %s", path)
    return Technique(program=program, parameters=parameters, attributes=attributes, uniforms=uniforms)


@registry.register(Sampler)
def parse_sampler(p: ElementParser, obj: Any, path: str) -> Sampler:
    mag_filter = p.optional_mapped(obj, "magFilter", path, INTEGER, tables.MAG_FILTERS, FilterType.LINEAR)
    min_filter = p.optional_mapped(
        obj, "minFilter", path, INTEGER, tables.MIN_FILTERS, FilterType.LINEAR_MIPMAP_LINEAR
    )
    wrap_s = p.optional_mapped(obj, "wrapS", path, INTEGER, tables.WRAP_MODES, WrapType.REPEAT)
    wrap_t = p.optional_mapped(obj, "wrapT", path, INTEGER, tables.WRAP_MODES, WrapType.REPEAT)
    return Sampler(mag_filter=mag_filter, min_filter=min_filter, wrap_s=wrap_s, wrap_t=wrap_t)


@registry.register(Material)
def parse_material(p: ElementParser, obj: Any, path: str) -> Material:
    technique = p.optional(obj, "technique", path, STRING, "")
    values = p.optional(obj, "values", path, Mapping(Entity(ParameterValue)), {})
    return Material(technique=technique, values=values)


@registry.register(Image)
def parse_image(p: ElementParser, obj: Any, path: str) -> Image:
    return Image(uri=p.required(obj, "uri", path, STRING))


@registry.register(Texture)
def parse_texture(p: ElementParser, obj: Any, path: str) -> Texture:
    sampler = p.required(obj, "sampler", path, STRING)
    source = p.required(obj, "source", path, STRING)
    texture_format = p.optional_mapped(obj, "format", path, INTEGER, tables.TEXTURE_FORMATS, TextureFormat.RGBA)
    internal_format = p.optional_mapped(
        obj, "internalFormat", path, INTEGER, tables.TEXTURE_FORMATS, TextureFormat.RGBA
    )
    texture_type = p.optional_mapped(obj, "type", path, INTEGER, tables.TEXTURE_TYPES, TextureType.UNSIGNED_BYTE)
    target = p.optional_mapped(obj, "target", path, INTEGER, tables.TEXTURE_TARGETS, TextureTarget.TEXTURE_2D)
    return Texture(
        sampler=sampler,
        source=source,
        format=texture_format,
        internal_format=internal_format,
        type=texture_type,
        target=target,
    )
