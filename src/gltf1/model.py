"""
Model - typed glTF 1.0 document graph.

Every entity is owned by exactly one Document. Cross references (a node's
camera, an accessor's buffer view, ...) are plain string ids, never object
references, and are not checked for existence.

Enum values are the wire values, so `Accessor.component_type.value` is the
GL constant found in the file. Optional string references default to "".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

IDENTITY_MATRIX: tuple[float, ...] = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)
DEFAULT_ROTATION: tuple[float, ...] = (0.0, 0.0, 0.0, 1.0)
DEFAULT_SCALE: tuple[float, ...] = (1.0, 1.0, 1.0)
DEFAULT_TRANSLATION: tuple[float, ...] = (0.0, 0.0, 0.0)


# Cameras

class CameraType(Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


@dataclass
class Perspective:
    yfov: float
    zfar: float
    znear: float
    aspect_ratio: float | None = None  # no default in glTF 1.0


@dataclass
class Orthographic:
    xmag: float
    ymag: float
    zfar: float
    znear: float


@dataclass
class Camera:
    """A camera; `projection` always matches `type`."""
    type: CameraType
    projection: Perspective | Orthographic

    @property
    def perspective(self) -> Perspective:
        if not isinstance(self.projection, Perspective):
            raise AttributeError(f"Camera is {self.type.value}, not perspective")
        return self.projection

    @property
    def orthographic(self) -> Orthographic:
        if not isinstance(self.projection, Orthographic):
            raise AttributeError(f"Camera is {self.type.value}, not orthographic")
        return self.projection


# Buffers and accessors

class BufferType(Enum):
    ARRAY_BUFFER = "arraybuffer"
    TEXT = "text"


@dataclass
class Buffer:
    uri: str
    byte_length: int = 0
    type: BufferType = BufferType.ARRAY_BUFFER


class BufferViewTarget(IntEnum):
    OTHER = 0  # target not given
    ARRAY_BUFFER = 34962
    ELEMENT_ARRAY_BUFFER = 34963


@dataclass
class BufferView:
    buffer: str
    byte_offset: int
    byte_length: int = 0
    target: BufferViewTarget = BufferViewTarget.OTHER


class ComponentType(IntEnum):
    BYTE = 5120
    UNSIGNED_BYTE = 5121
    SHORT = 5122
    UNSIGNED_SHORT = 5123
    FLOAT = 5126


class AccessorType(Enum):
    SCALAR = "SCALAR"
    VEC2 = "VEC2"
    VEC3 = "VEC3"
    VEC4 = "VEC4"
    MAT2 = "MAT2"
    MAT3 = "MAT3"
    MAT4 = "MAT4"


@dataclass
class Accessor:
    buffer_view: str
    byte_offset: int
    component_type: ComponentType
    type: AccessorType
    count: int
    byte_stride: int = 0
    min: list[float] = field(default_factory=list)
    max: list[float] = field(default_factory=list)


# Meshes

class PrimitiveMode(IntEnum):
    POINTS = 0
    LINES = 1
    LINE_LOOP = 2
    LINE_STRIP = 3
    TRIANGLES = 4
    TRIANGLE_STRIP = 5
    TRIANGLE_FAN = 6


@dataclass
class Primitive:
    """One drawable piece of a mesh."""
    material: str
    attributes: dict[str, str] = field(default_factory=dict)  # semantic -> accessor id
    indices: str = ""
    mode: PrimitiveMode = PrimitiveMode.TRIANGLES


@dataclass
class Mesh:
    primitives: list[Primitive] = field(default_factory=list)


# Shading pipeline

class ShaderType(IntEnum):
    FRAGMENT_SHADER = 35632
    VERTEX_SHADER = 35633


@dataclass
class Shader:
    uri: str
    type: ShaderType


@dataclass
class Program:
    fragment_shader: str
    vertex_shader: str
    attributes: list[str] = field(default_factory=list)


class ParameterValueType(Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER_ARRAY = "number_array"
    BOOLEAN_ARRAY = "boolean_array"
    STRING_ARRAY = "string_array"

    @property
    def is_array(self) -> bool:
        return self.name.endswith("_ARRAY")


@dataclass
class ParameterValue:
    """
    A technique default or material value.

    Scalars keep their single value in `values` too, so the payload has the
    same shape for both forms.
    """
    type: ParameterValueType
    values: list[float] | list[bool] | list[str]

    @property
    def is_array(self) -> bool:
        return self.type.is_array

    @property
    def scalar(self) -> float | bool | str:
        if self.is_array:
            raise AttributeError(f"Parameter value is {self.type.value}, not a scalar")
        return self.values[0]


class ParameterType(IntEnum):
    BYTE = 5120
    UNSIGNED_BYTE = 5121
    SHORT = 5122
    UNSIGNED_SHORT = 5123
    INT = 5124
    UNSIGNED_INT = 5125
    FLOAT = 5126
    FLOAT_VEC2 = 35664
    FLOAT_VEC3 = 35665
    FLOAT_VEC4 = 35666
    INT_VEC2 = 35667
    INT_VEC3 = 35668
    INT_VEC4 = 35669
    BOOL = 35670
    BOOL_VEC2 = 35671
    BOOL_VEC3 = 35672
    BOOL_VEC4 = 35673
    FLOAT_MAT2 = 35674
    FLOAT_MAT3 = 35675
    FLOAT_MAT4 = 35676
    SAMPLER_2D = 35678


@dataclass
class Parameter:
    type: ParameterType
    node: str = ""
    semantic: str = ""
    value: ParameterValue | None = None


@dataclass
class Technique:
    # render states are not modeled
    program: str
    parameters: dict[str, Parameter] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)  # attribute -> parameter
    uniforms: dict[str, str] = field(default_factory=dict)  # uniform -> parameter


@dataclass
class Material:
    technique: str = ""
    values: dict[str, ParameterValue] = field(default_factory=dict)


# Textures

class FilterType(IntEnum):
    NEAREST = 9728
    LINEAR = 9729
    NEAREST_MIPMAP_NEAREST = 9984
    LINEAR_MIPMAP_NEAREST = 9985
    NEAREST_MIPMAP_LINEAR = 9986
    LINEAR_MIPMAP_LINEAR = 9987


class WrapType(IntEnum):
    CLAMP_TO_EDGE = 33071
    MIRRORED_REPEAT = 33648
    REPEAT = 10497


@dataclass
class Sampler:
    mag_filter: FilterType = FilterType.LINEAR
    min_filter: FilterType = FilterType.LINEAR_MIPMAP_LINEAR
    wrap_s: WrapType = WrapType.REPEAT
    wrap_t: WrapType = WrapType.REPEAT


@dataclass
class Image:
    uri: str


class TextureFormat(IntEnum):
    ALPHA = 6406
    RGB = 6407
    RGBA = 6408
    LUMINANCE = 6409
    LUMINANCE_ALPHA = 6410


class TextureType(IntEnum):
    UNSIGNED_BYTE = 5121
    UNSIGNED_SHORT_5_6_5 = 33635
    UNSIGNED_SHORT_4_4_4_4 = 32819
    UNSIGNED_SHORT_5_5_5_1 = 32820


class TextureTarget(IntEnum):
    TEXTURE_2D = 3553


@dataclass
class Texture:
    sampler: str
    source: str  # image id
    format: TextureFormat = TextureFormat.RGBA
    internal_format: TextureFormat = TextureFormat.RGBA
    type: TextureType = TextureType.UNSIGNED_BYTE
    target: TextureTarget = TextureTarget.TEXTURE_2D


# Animation (placeholder: animations are never parsed)

@dataclass
class Animation:
    channels: list = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)
    samplers: dict = field(default_factory=dict)


# Skins and the node hierarchy

@dataclass
class Skin:
    inverse_bind_matrices: str
    joint_names: list[str]
    bind_shape_matrix: tuple[float, ...] = IDENTITY_MATRIX


class TransformType(Enum):
    MATRIX = "matrix"
    COMPOSITE = "composite"


@dataclass
class MatrixTransform:
    matrix: tuple[float, ...] = IDENTITY_MATRIX  # column-major 4x4


@dataclass
class CompositeTransform:
    rotation: tuple[float, ...] = DEFAULT_ROTATION  # quaternion x, y, z, w
    scale: tuple[float, ...] = DEFAULT_SCALE
    translation: tuple[float, ...] = DEFAULT_TRANSLATION


@dataclass
class Node:
    camera: str = ""
    children: list[str] = field(default_factory=list)
    skeletons: list[str] = field(default_factory=list)
    skin: str = ""
    joint_name: str = ""
    meshes: list[str] = field(default_factory=list)
    transform: MatrixTransform | CompositeTransform = field(default_factory=MatrixTransform)

    @property
    def transform_type(self) -> TransformType:
        if isinstance(self.transform, CompositeTransform):
            return TransformType.COMPOSITE
        return TransformType.MATRIX


@dataclass
class Scene:
    nodes: list[str] = field(default_factory=list)


@dataclass
class Document:
    """A parsed glTF 1.0 file: one id-keyed dict per category plus the default scene."""
    cameras: dict[str, Camera] = field(default_factory=dict)
    buffers: dict[str, Buffer] = field(default_factory=dict)
    buffer_views: dict[str, BufferView] = field(default_factory=dict)
    accessors: dict[str, Accessor] = field(default_factory=dict)
    meshes: dict[str, Mesh] = field(default_factory=dict)
    shaders: dict[str, Shader] = field(default_factory=dict)
    programs: dict[str, Program] = field(default_factory=dict)
    materials: dict[str, Material] = field(default_factory=dict)
    techniques: dict[str, Technique] = field(default_factory=dict)
    samplers: dict[str, Sampler] = field(default_factory=dict)
    textures: dict[str, Texture] = field(default_factory=dict)
    images: dict[str, Image] = field(default_factory=dict)
    animations: dict[str, Animation] = field(default_factory=dict)
    skins: dict[str, Skin] = field(default_factory=dict)
    nodes: dict[str, Node] = field(default_factory=dict)
    scenes: dict[str, Scene] = field(default_factory=dict)
    scene: str = ""

    def collections(self) -> dict[str, dict]:
        """All 16 collections keyed by their glTF field name."""
        return {
            "cameras": self.cameras,
            "buffers": self.buffers,
            "bufferViews": self.buffer_views,
            "accessors": self.accessors,
            "meshes": self.meshes,
            "shaders": self.shaders,
            "programs": self.programs,
            "materials": self.materials,
            "techniques": self.techniques,
            "samplers": self.samplers,
            "textures": self.textures,
            "images": self.images,
            "animations": self.animations,
            "skins": self.skins,
            "nodes": self.nodes,
            "scenes": self.scenes,
        }
