"""
Wavefront OBJ import through pywavefront
"""
import logging
import os
import numpy as np
from typing import Dict, List, Optional

import pywavefront

from core.linalg import IDENTITY, point, vector
from core.materials import Material
from core.scene import Group, GroupKind, SceneBuilder, Shape, ShapeArgs

logger = logging.getLogger(__name__)

# Floats per vertex for each pywavefront vertex_format component
_COMPONENT_WIDTHS = {'T': 2, 'C': 3, 'N': 3, 'V': 3}


def _split_vertex_data(vertex_format: str, data: np.ndarray):
    """Return (positions, normals or None) from interleaved vertex data"""
    components = [part[0] for part in vertex_format.split('_')]
    stride = sum(_COMPONENT_WIDTHS[c] for c in components)
    if stride == 0 or len(data) % stride != 0:
        raise ValueError(f"Unexpected vertex data layout for format {vertex_format}")

    rows = data.reshape(-1, stride)
    positions = normals = None
    offset = 0
    for c in components:
        width = _COMPONENT_WIDTHS[c]
        if c == 'V':
            positions = rows[:, offset:offset + width]
        elif c == 'N':
            normals = rows[:, offset:offset + width]
        offset += width
    return positions, normals


def _mesh_triangles(mesh, cursors: Dict[str, int], builder: SceneBuilder,
                    args: ShapeArgs) -> List[Shape]:
    """Triangles of one mesh.

    pywavefront appends the faces of every mesh that uses a material to that
    material's vertex list, so each material keeps a cursor into its data.
    A single-material mesh takes exactly its own face count from the cursor.
    """
    triangles = []
    for mesh_material in mesh.materials:
        data = np.array(mesh_material.vertices, dtype=np.float64)
        if data.size == 0:
            continue
        positions, normals = _split_vertex_data(mesh_material.vertex_format, data)
        if positions is None:
            continue

        start = cursors.get(mesh_material.name, 0)
        stop = len(positions)
        if len(mesh.materials) == 1 and mesh.faces:
            stop = min(start + 3 * len(mesh.faces), stop)
        cursors[mesh_material.name] = stop

        for i in range(start, stop - 2, 3):
            p1, p2, p3 = (point(*positions[i + k]) for k in range(3))
            if normals is None:
                triangles.append(builder.triangle(p1, p2, p3, args))
            else:
                n1, n2, n3 = (vector(*normals[i + k]) for k in range(3))
                triangles.append(builder.smooth_triangle(p1, p2, p3, n1, n2, n3, args))
    return triangles


def load_obj(path: str, builder: SceneBuilder, transform: np.ndarray = IDENTITY,
             material: Optional[Material] = None) -> Group:
    """Load an OBJ file as a group holding one aggregation group per object.

    Each ``o`` statement starts a new child group. Faces that carry vertex
    normals become smooth triangles. `material` is the default material for
    every triangle, and `transform` places the whole model.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"OBJ file not found: {path}")

    scene = pywavefront.Wavefront(path, collect_faces=True, create_materials=True, parse=True)
    args = ShapeArgs(material=material or Material())

    cursors = {}
    children = []
    count = 0
    for mesh in scene.mesh_list:
        triangles = _mesh_triangles(mesh, cursors, builder, args)
        if not triangles:
            continue
        children.append(builder.group(triangles))
        count += len(triangles)
        logger.debug(f"Mesh {mesh.name!r}: {len(triangles)} triangles")

    if not children:
        logger.warning(f"No faces found in {path}")
    else:
        logger.info(f"Loaded {count} triangles in {len(children)} groups from {path}")

    return builder.group(children, GroupKind.AGGREGATION, transform)
