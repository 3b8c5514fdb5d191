"""Shared fixtures: a fake Blender executable"""
import stat

import pytest

from svgsmith.exceptions import ConversionFailedError

FAKE_BLENDER_TEMPLATE = """#!/bin/sh
script="$4"
if [ -f "$script" ]; then
    echo "script-present $script" >> "{log}"
else
    echo "script-missing $script" >> "{log}"
fi
echo "args $*" >> "{log}"
echo "Blender 4.1.0 (fake)"
echo ""
echo "Read blend: $script"
out=$(sed -n "s/^OUTPUT_PATH = '\\(.*\\)'$/\\1/p" "$script")
{body}
"""


@pytest.fixture
def make_fake_blender(tmp_path):
    """
    Build a shell script that behaves like ``blender --disable-autoexec -b -P script``.

    It logs whether the script file existed, prints a few lines, then either
    writes the GLB named in the script, exits with ``exit_code`` or sleeps.
    """
    def _make(exit_code=0, write_output=True, sleep=None, name="blender"):
        log = tmp_path / f"{name}.log"
        body = []
        if write_output:
            body.append('[ -n "$out" ] && printf "glTF" > "$out"')
        if exit_code:
            body.append('echo "Error: SVG import failed" ')
        body.append('echo "Blender quit"')
        if sleep:
            body.append(f"exec sleep {sleep}")
        body.append(f"exit {exit_code}")
        path = tmp_path / name
        path.write_text(FAKE_BLENDER_TEMPLATE.format(log=log, body="\n".join(body)))
        path.chmod(path.stat().st_mode | stat.S_IEXEC | stat.S_IXGRP | stat.S_IXOTH)
        return str(path), log
    return _make


@pytest.fixture
def conversion_failed():
    return ConversionFailedError(1, "Error: SVG import failed")
