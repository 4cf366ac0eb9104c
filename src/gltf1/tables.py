"""
Allow-list tables.

Each table maps a wire value to its enum member. A value that is not a key
is rejected by the mapped element wrappers. Tables are built once at import
and are read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from .model import (
    AccessorType,
    BufferType,
    BufferViewTarget,
    CameraType,
    ComponentType,
    FilterType,
    ParameterType,
    PrimitiveMode,
    ShaderType,
    TextureFormat,
    TextureTarget,
    TextureType,
    WrapType,
)


def allow_list(*members: Enum) -> Mapping:
    """Build a read-only table keyed by each member's wire value."""
    return MappingProxyType({member.value: member for member in members})


CAMERA_TYPES = allow_list(*CameraType)
BUFFER_TYPES = allow_list(*BufferType)
BUFFER_VIEW_TARGETS = allow_list(
    BufferViewTarget.ARRAY_BUFFER,
    BufferViewTarget.ELEMENT_ARRAY_BUFFER,
)
COMPONENT_TYPES = allow_list(*ComponentType)
ACCESSOR_TYPES = allow_list(*AccessorType)
PRIMITIVE_MODES = allow_list(*PrimitiveMode)
SHADER_TYPES = allow_list(*ShaderType)
PARAMETER_TYPES = allow_list(*ParameterType)
MAG_FILTERS = allow_list(FilterType.NEAREST, FilterType.LINEAR)
MIN_FILTERS = allow_list(*FilterType)
WRAP_MODES = allow_list(*WrapType)
TEXTURE_FORMATS = allow_list(*TextureFormat)
TEXTURE_TYPES = allow_list(*TextureType)
TEXTURE_TARGETS = allow_list(*TextureTarget)
