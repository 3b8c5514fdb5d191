"""In-memory stand-ins for the pipeline's collaborators"""
import ast
import asyncio
import os
import re
import sys

import pytest

from svgsmith.blender import ToolInfo

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake Blender is a POSIX shell script")


def output_path_from_script(script_text):
    match = re.search(r"^OUTPUT_PATH = (.*)$", script_text, re.MULTILINE)
    return ast.literal_eval(match.group(1))


def input_path_from_script(script_text):
    match = re.search(r"^INPUT_PATH = (.*)$", script_text, re.MULTILINE)
    return ast.literal_eval(match.group(1))


class FakeRunner:
    """Stands in for ProcessRunner; writes the GLB unless told to fail"""

    def __init__(self, delays=None, fail=None, write_output=True):
        self.delays = delays or {}
        self.fail = fail or {}
        self.write_output = write_output
        self.calls = []

    async def run(self, script_text, executable, reporter=None):
        source = input_path_from_script(script_text)
        name = os.path.basename(source)
        self.calls.append((name, executable))
        if reporter:
            reporter.update(0.0, f"Read: {name}", "")
        await asyncio.sleep(self.delays.get(name, 0))
        if name in self.fail:
            raise self.fail[name]
        if self.write_output:
            with open(output_path_from_script(script_text), "wb") as f:
                f.write(b"glTF")


class FakeLocator:
    def __init__(self, available=True, executable="/opt/blender/blender"):
        self.available = available
        self.executable = executable
        self.calls = 0

    def locate(self):
        self.calls += 1
        if not self.available:
            return ToolInfo(available=False)
        return ToolInfo(available=True, executable=self.executable)


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, message, level="error"):
        self.messages.append((message, level))


class RecordingImporter:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def import_assets(self, asset_class, paths, scene, position, rotation, skip_dialogue):
        if self.fail:
            raise RuntimeError("host import exploded")
        self.calls.append({
            "asset_class": asset_class,
            "paths": list(paths),
            "scene": scene,
            "position": position,
            "rotation": rotation,
            "skip_dialogue": skip_dialogue,
        })
