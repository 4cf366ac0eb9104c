"""
Scene assemblers: cameras, skins, nodes and scenes.

Cameras and nodes are tagged variants. The discriminant is resolved first,
then only the fields of the selected variant are read.
"""

from __future__ import annotations

from typing import Any

from .. import tables
from ..elements import FLOAT, STRING, Array, ElementParser, registry
from ..jsontree import MISSING, child
from ..model import (
    DEFAULT_ROTATION,
    DEFAULT_SCALE,
    DEFAULT_TRANSLATION,
    IDENTITY_MATRIX,
    Camera,
    CameraType,
    CompositeTransform,
    MatrixTransform,
    Node,
    Orthographic,
    Perspective,
    Scene,
    Skin,
)

_COMPOSITE_FIELDS = ("rotation", "scale", "translation")


@registry.register(Camera)
def parse_camera(p: ElementParser, obj: Any, path: str) -> Camera:
    camera_type = p.required_mapped(obj, "type", path, STRING, tables.CAMERA_TYPES)

    if camera_type is CameraType.ORTHOGRAPHIC:
        data = child(obj, "orthographic")
        data_path = f"{path}.orthographic"
        projection = Orthographic(
            xmag=p.required(data, "xmag", data_path, FLOAT),
            ymag=p.required(data, "ymag", data_path, FLOAT),
            zfar=p.required(data, "zfar", data_path, FLOAT),
            znear=p.required(data, "znear", data_path, FLOAT),
        )
    else:
        data = child(obj, "perspective")
        data_path = f"{path}.perspective"
        projection = Perspective(
            yfov=p.required(data, "yfov", data_path, FLOAT),
            zfar=p.required(data, "zfar", data_path, FLOAT),
            znear=p.required(data, "znear", data_path, FLOAT),
            aspect_ratio=p.optional(data, "aspectRatio", data_path, FLOAT),
        )

    return Camera(type=camera_type, projection=projection)


@registry.register(Skin)
def parse_skin(p: ElementParser, obj: Any, path: str) -> Skin:
    bind_shape_matrix = p.fixed(obj, "bindShapeMatrix", path, IDENTITY_MATRIX)
    inverse_bind_matrices = p.required(obj, "inverseBindMatrices", path, STRING)
    joint_names = p.required(obj, "jointNames", path, Array(STRING))
    return Skin(
        inverse_bind_matrices=inverse_bind_matrices,
        joint_names=joint_names,
        bind_shape_matrix=bind_shape_matrix,
    )


def _is_composite(obj: Any) -> bool:
    """Any of rotation/scale/translation makes a node composite, even next to a matrix."""
    return any(child(obj, name) is not MISSING for name in _COMPOSITE_FIELDS)


@registry.register(Node)
def parse_node(p: ElementParser, obj: Any, path: str) -> Node:
    camera = p.optional(obj, "camera", path, STRING, "")
    children = p.optional(obj, "children", path, Array(STRING), [])
    skeletons = p.optional(obj, "skeletons", path, Array(STRING), [])
    skin = p.optional(obj, "skin", path, STRING, "")
    joint_name = p.optional(obj, "jointName", path, STRING, "")
    meshes = p.optional(obj, "meshes", path, Array(STRING), [])

    if _is_composite(obj):
        transform = CompositeTransform(
            rotation=p.fixed(obj, "rotation", path, DEFAULT_ROTATION),
            scale=p.fixed(obj, "scale", path, DEFAULT_SCALE),
            translation=p.fixed(obj, "translation", path, DEFAULT_TRANSLATION),
        )
    else:
        transform = MatrixTransform(matrix=p.fixed(obj, "matrix", path, IDENTITY_MATRIX))

    return Node(
        camera=camera,
        children=children,
        skeletons=skeletons,
        skin=skin,
        joint_name=joint_name,
        meshes=meshes,
        transform=transform,
    )


@registry.register(Scene)
def parse_scene(p: ElementParser, obj: Any, path: str) -> Scene:
    return Scene(nodes=p.optional(obj, "nodes", path, Array(STRING), []))
