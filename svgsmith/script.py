"""
Blender automation script generation

Builds the Python script Blender runs in background mode to turn an SVG into
a GLB: import the SVG as curves, drop the default cube, convert every curve
to a mesh and export the scene as glTF binary.

Last tested against Blender 3.5.0 and 4.x.
"""

# Deleting the default cube is necessary for the export to contain only the
# SVG geometry. Factory settings are not used because the SVG importer add-on
# must stay enabled.
SCRIPT_TEMPLATE = """import bpy

INPUT_PATH = {input_literal}
OUTPUT_PATH = {output_literal}

bpy.ops.import_curve.svg(filepath=INPUT_PATH)

objs = bpy.data.objects
if 'Cube' in objs:
    objs.remove(objs['Cube'], do_unlink=True)

for obj in list(bpy.data.objects):
    if type(obj.data).__name__ == 'Curve':
        bpy.context.view_layer.objects.active = obj
        obj.select_set(True)
        bpy.ops.object.convert(target='MESH')
        obj.select_set(False)

bpy.ops.export_scene.gltf(filepath=OUTPUT_PATH, export_format='GLB')
print(f"Export complete: {{OUTPUT_PATH}}")
"""


def to_blender_path(path: str) -> str:
    """Normalize separators; Blender accepts forward slashes on every platform"""
    return path.replace("\\", "/")


def _python_literal(path: str) -> str:
    # repr() escapes quotes, backslashes and control characters, so the path
    # always stays a single string literal in the generated source.
    return repr(to_blender_path(path))


def generate_conversion_script(input_path: str, output_path: str) -> str:
    """
    Generate the Blender script converting ``input_path`` to ``output_path``.

    Args:
        input_path: SVG file to import
        output_path: GLB file Blender should write

    Returns:
        str: Python source for ``blender -b -P``

    Raises:
        ValueError: If either path is empty

    Example:
        >>> script = generate_conversion_script("logo.svg", "/tmp/logo.svg.glb")
        >>> "import_curve.svg" in script
        True
    """
    if not input_path:
        raise ValueError("Input path must not be empty")
    if not output_path:
        raise ValueError("Output path must not be empty")

    return SCRIPT_TEMPLATE.format(
        input_literal=_python_literal(input_path),
        output_literal=_python_literal(output_path),
    )
