"""Binary glTF encoding of exported meshes.

Provides:
- export_material: the fixed PBR material of every export
- encode_glb: serialize one mesh as a single-mesh GLB
"""

import trimesh
from trimesh.exchange.gltf import export_glb
from trimesh.visual import TextureVisuals
from trimesh.visual.material import PBRMaterial

from sketchmesh.config import MeshConfig

MESH_NAME = "outline"


def export_material(config: MeshConfig) -> PBRMaterial:
    """The material every exported mesh carries."""
    r, g, b = config.material_color
    return PBRMaterial(
        name="sketchmesh",
        baseColorFactor=[r, g, b, 255],
        metallicFactor=config.metallic,
        roughnessFactor=config.roughness,
        doubleSided=True,
    )


def encode_glb(mesh: trimesh.Trimesh, config: MeshConfig) -> bytes:
    """Serialize one mesh with the export material as GLB bytes.

    Vertex normals are written alongside positions.
    """
    mesh.visual = TextureVisuals(material=export_material(config))
    scene = trimesh.Scene()
    scene.add_geometry(mesh, geom_name=MESH_NAME, node_name=MESH_NAME)
    return export_glb(scene, include_normals=True)
