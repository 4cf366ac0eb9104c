"""
Document assembler - the public entry point.

    result = parse(data)
    if result.ok:
        node = result.document.nodes["root"]
    else:
        print(result.error)

A parse either yields a complete Document or exactly one error message;
nothing partial is ever returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .assemblers import geometry as _geometry  # noqa: F401 - ensure geometry assemblers are registered
from .assemblers import scene as _scene  # noqa: F401 - ensure scene assemblers are registered
from .assemblers import shading as _shading  # noqa: F401 - ensure shading assemblers are registered
from .config import ParseConfig
from .elements import STRING, ElementParser, Entity, Mapping
from .errors import GltfError
from .jsontree import load_tree
from .model import (
    Accessor,
    Buffer,
    BufferView,
    Camera,
    Document,
    Image,
    Material,
    Mesh,
    Node,
    Program,
    Sampler,
    Scene,
    Shader,
    Skin,
    Technique,
    Texture,
)

logger = logging.getLogger(__name__)

ROOT = "glTF"

# (glTF field, Document attribute, entity type), in parse order
COLLECTIONS: tuple[tuple[str, str, type], ...] = (
    ("cameras", "cameras", Camera),
    ("buffers", "buffers", Buffer),
    ("bufferViews", "buffer_views", BufferView),
    ("accessors", "accessors", Accessor),
    ("meshes", "meshes", Mesh),
    ("shaders", "shaders", Shader),
    ("programs", "programs", Program),
    ("materials", "materials", Material),
    ("techniques", "techniques", Technique),
    ("samplers", "samplers", Sampler),
    ("images", "images", Image),
    ("textures", "textures", Texture),
    ("skins", "skins", Skin),
    ("nodes", "nodes", Node),
    ("scenes", "scenes", Scene),
)


@dataclass
class ParseResult:
    """Either a document or an error message, never both."""
    document: Document | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None

    def unwrap(self) -> Document:
        """Return the document or raise the failure as a GltfError."""
        if self.document is None:
            raise GltfError(self.error or "No document")
        return self.document


def _assemble(tree: Any, parser: ElementParser) -> Document:
    fields: dict[str, Any] = {}
    for json_name, attr, entity_type in COLLECTIONS:
        fields[attr] = parser.optional(tree, json_name, ROOT, Mapping(Entity(entity_type)), {})
        if fields[attr]:
            logger.debug("Parsed %d %s", len(fields[attr]), json_name)
    fields["scene"] = parser.optional(tree, "scene", ROOT, STRING, "")
    return Document(**fields)


def parse_or_raise(data: bytes | str, config: ParseConfig | None = None) -> Document:
    """
    Parse glTF 1.0 JSON text, raising the first GltfError encountered.

    Without a config the permissive defaults apply; the config file and
    environment are only consulted by the CLI.
    """
    parser = ElementParser(config or ParseConfig())
    tree = load_tree(data)
    return _assemble(tree, parser)


def parse(data: bytes | str, config: ParseConfig | None = None) -> ParseResult:
    """Parse glTF 1.0 JSON text into a ParseResult."""
    try:
        document = parse_or_raise(data, config)
    except GltfError as e:
        logger.debug("Parse failed: %s", e)
        return ParseResult(error=str(e))
    return ParseResult(document=document)


def load(path: str | Path, config: ParseConfig | None = None) -> ParseResult:
    """Read and parse a .gltf file. I/O errors propagate."""
    return parse(Path(path).read_bytes(), config)
