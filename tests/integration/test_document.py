"""
Integration tests for whole-document parsing.
"""

import json
from pathlib import Path

import pytest

import gltf1.config
from gltf1.config import ParseConfig
from gltf1.document import COLLECTIONS, ParseResult, load, parse, parse_or_raise
from gltf1.errors import GltfError, JsonSyntaxError, MissingElementError, UnexpectedValueError
from gltf1.model import (
    AccessorType,
    BufferViewTarget,
    CameraType,
    ComponentType,
    CompositeTransform,
    Document,
    FilterType,
    MatrixTransform,
    ParameterType,
    ParameterValueType,
    TextureTarget,
    TransformType,
    WrapType,
)


FIXTURES = Path(__file__).parent.parent / "fixtures"
BOX = FIXTURES / "box.gltf"


@pytest.fixture
def box():
    return parse_or_raise(BOX.read_bytes(), ParseConfig())


@pytest.fixture
def box_json():
    return json.loads(BOX.read_text())


class TestBoxFixture:
    def test_collection_sizes(self, box):
        sizes = {name: len(entities) for name, entities in box.collections().items()}
        assert sizes == {
            "cameras": 2,
            "buffers": 1,
            "bufferViews": 3,
            "accessors": 4,
            "meshes": 1,
            "shaders": 2,
            "programs": 1,
            "materials": 1,
            "techniques": 1,
            "samplers": 1,
            "textures": 1,
            "images": 1,
            "animations": 0,
            "skins": 1,
            "nodes": 6,
            "scenes": 1,
        }

    def test_default_scene(self, box):
        assert box.scene == "defaultScene"
        assert box.scenes["defaultScene"].nodes == ["node_1", "Armature"]

    def test_accessors(self, box):
        indices = box.accessors["accessor_21"]
        assert indices.component_type is ComponentType.UNSIGNED_SHORT
        assert indices.type is AccessorType.SCALAR
        assert indices.count == 36

        normals = box.accessors["accessor_25"]
        assert normals.byte_offset == 288
        assert normals.min == [-1.0, -1.0, -1.0]

    def test_buffer_views(self, box):
        assert box.buffer_views["bufferView_29"].target is BufferViewTarget.ELEMENT_ARRAY_BUFFER
        assert box.buffer_views["bufferView_30"].target is BufferViewTarget.ARRAY_BUFFER
        untargeted = box.buffer_views["bufferView_31"]
        assert untargeted.target is BufferViewTarget.OTHER
        assert untargeted.byte_length == 0

    def test_cameras(self, box):
        assert box.cameras["camera_0"].type is CameraType.PERSPECTIVE
        assert box.cameras["camera_0"].perspective.aspect_ratio == 1.5
        assert box.cameras["camera_1"].orthographic.ymag == 1.5

    def test_node_transforms(self, box):
        assert box.nodes["node_1"].transform_type is TransformType.MATRIX
        assert box.nodes["node_1"].transform.matrix[6] == -1.0

        group = box.nodes["groupLocator030Node"]
        assert isinstance(group.transform, CompositeTransform)
        assert group.transform.translation == (0.0, 2.0, 0.0)
        assert group.transform.scale == (1.0, 1.0, 1.0)

        assert box.nodes["Bone"].transform.scale == (2.0, 2.0, 2.0)
        assert box.nodes["txtrLocator026Node"].transform == MatrixTransform()

    def test_node_references(self, box):
        armature = box.nodes["Armature"]
        assert armature.skin == "Armature-skin"
        assert armature.skeletons == ["Bone"]
        assert box.nodes["Bone"].joint_name == "Bone"
        assert box.nodes["txtrLocator026Node"].camera == "camera_0"

    def test_shading(self, box):
        technique = box.techniques["technique0"]
        assert technique.program == "program_0"
        assert technique.parameters["diffuse"].type is ParameterType.SAMPLER_2D
        assert technique.parameters["shininess"].value.scalar == 50.0
        assert technique.parameters["light0Transform"].node == "node_1"

        values = box.materials["Texture"].values
        assert values["diffuse"].type is ParameterValueType.STRING
        assert values["specular"].values == [0.2, 0.2, 0.2, 1.0]
        assert values["doubleSided"].scalar is False

    def test_sampler_and_texture(self, box):
        sampler = box.samplers["sampler_0"]
        assert sampler.min_filter is FilterType.LINEAR_MIPMAP_LINEAR
        assert sampler.wrap_t is WrapType.CLAMP_TO_EDGE
        assert box.textures["texture_Image0001"].target is TextureTarget.TEXTURE_2D

    def test_animations_are_not_read(self, box):
        assert box.animations == {}

    def test_parse_is_deterministic(self):
        data = BOX.read_bytes()
        assert parse(data, ParseConfig()) == parse(data, ParseConfig())

    def test_str_input(self, box):
        assert parse_or_raise(BOX.read_text(), ParseConfig()) == box


class TestEdgeCases:
    def test_empty_object(self):
        doc = parse_or_raise(b"{}", ParseConfig())
        assert doc == Document()
        assert all(len(entities) == 0 for entities in doc.collections().values())
        assert doc.scene == ""

    def test_non_object_root_yields_empty_document(self):
        assert parse_or_raise(b"[]", ParseConfig()) == Document()

    def test_unknown_keys_are_ignored(self):
        doc = parse_or_raise(b'{"extensionsUsed": ["x"], "asset": {"version": "1.0"}}', ParseConfig())
        assert doc == Document()

    def test_collections_are_parsed_in_order(self):
        names = [json_name for json_name, _, _ in COLLECTIONS]
        assert names[:4] == ["cameras", "buffers", "bufferViews", "accessors"]
        assert names[-2:] == ["nodes", "scenes"]
        assert "animations" not in names

    def test_first_error_wins(self):
        data = json.dumps({
            "cameras": {"c": {"type": "fisheye"}},
            "nodes": {"n": {"camera": 1}},
        })
        result = parse(data, ParseConfig())
        assert "glTF.cameras.c.type" in result.error

    def test_scene_must_be_a_string(self):
        result = parse(b'{"scene": 0}', ParseConfig())
        assert result.error == "Could not parse element 'glTF.scene' as a string."

    def test_collection_must_be_an_object(self):
        result = parse(b'{"nodes": []}', ParseConfig())
        assert result.error == "Could not parse children of element 'glTF.nodes'. It is not an object."

    def test_strict_config_is_applied(self):
        data = b'{"nodes": {"n": {"matrix": [1, 0, 0]}}}'
        assert parse(data, ParseConfig()).ok
        assert not parse(data, ParseConfig(strict_fixed_arrays=True)).ok

    def test_integer_beyond_float_range_is_an_error(self):
        data = b'{"nodes": {"n": {"translation": [1' + b"0" * 400 + b"]}}}"
        result = parse(data, ParseConfig())
        assert not result.ok
        assert result.error == "Could not parse element 'glTF.nodes.n.translation[0]' as a float."


class TestDefaultConfig:
    """Library parsing never consults the config file or environment."""

    @pytest.fixture(autouse=True)
    def strict_environment(self, tmp_path, monkeypatch):
        home = tmp_path / "gltf1"
        home.mkdir()
        (home / "config.toml").write_text("[parse]\nstrict_parameter_arrays = true\n")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.setenv("GLTF1_STRICT_FIXED_ARRAYS", "1")
        monkeypatch.setattr(gltf1.config, "_config", None)

    def test_parse_ignores_environment(self):
        assert parse(b'{"nodes": {"n": {"matrix": [1, 0, 0]}}}').ok

    def test_parse_or_raise_ignores_config_file(self):
        doc = parse_or_raise(b'{"materials": {"m": {"values": {"v": [1, 2.5]}}}}')
        assert doc.materials["m"].values["v"].values == [1.0, 2.5]

    def test_load_ignores_environment(self, tmp_path):
        path = tmp_path / "short.gltf"
        path.write_bytes(b'{"skins": {"s": {"bindShapeMatrix": [2], "inverseBindMatrices": "a", "jointNames": []}}}')
        assert load(path).ok

    def test_explicit_config_still_applies(self):
        assert not parse(b'{"nodes": {"n": {"matrix": [1, 0, 0]}}}', ParseConfig(strict_fixed_arrays=True)).ok


class TestErrors:
    def test_missing_required_element(self, box_json):
        del box_json["accessors"]["accessor_23"]["count"]
        result = parse(json.dumps(box_json), ParseConfig())
        assert not result.ok
        assert result.document is None
        assert result.error == "The required element 'glTF.accessors.accessor_23.count' does not exist."

    def test_unexpected_value(self, box_json):
        box_json["accessors"]["accessor_21"]["componentType"] = 9999
        with pytest.raises(UnexpectedValueError) as exc_info:
            parse_or_raise(json.dumps(box_json), ParseConfig())
        assert exc_info.value.value == 9999
        assert exc_info.value.path == "glTF.accessors.accessor_21.componentType"

    def test_syntax_error_passes_through(self):
        result = parse(b'{"nodes": {', ParseConfig())
        assert not result.ok
        assert result.error.startswith("1:")

    def test_syntax_error_raised(self):
        with pytest.raises(JsonSyntaxError):
            parse_or_raise(b"{,}", ParseConfig())

    def test_nested_error_path(self, box_json):
        del box_json["meshes"]["Geometry-mesh002"]["primitives"][0]["material"]
        with pytest.raises(MissingElementError) as exc_info:
            parse_or_raise(json.dumps(box_json), ParseConfig())
        assert exc_info.value.path == "glTF.meshes.Geometry-mesh002.primitives[0].material"


class TestParseResult:
    def test_ok(self, box):
        result = ParseResult(document=box)
        assert result.ok
        assert result.unwrap() is box

    def test_unwrap_error(self):
        result = ParseResult(error="boom")
        assert not result.ok
        with pytest.raises(GltfError, match="boom"):
            result.unwrap()


class TestLoad:
    def test_load_path(self, box):
        result = load(BOX, ParseConfig())
        assert result.ok
        assert result.document == box

    def test_load_str_path(self):
        assert load(str(BOX), ParseConfig()).ok

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load(tmp_path / "nope.gltf")
