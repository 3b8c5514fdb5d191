"""
Tests for SVGSmith CLI

These tests verify the CLI command structure and error handling.
Conversions run against a fake Blender script, never the real one.
"""
import ast
from pathlib import Path

from click.testing import CliRunner

from fakes import posix_only
from svgsmith.cli import cli


class TestCLI:
    """Test CLI command structure and basic functionality"""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'SVGSmith' in result.output
        assert 'convert' in result.output
        assert 'script' in result.output
        assert 'doctor' in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_convert_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['convert', '--help'])
        assert result.exit_code == 0
        assert 'Convert SVG files to GLB models' in result.output
        assert '--output' in result.output
        assert '--blender' in result.output

    def test_convert_requires_output(self, tmp_path):
        svg = tmp_path / "a.svg"
        svg.write_text("<svg/>")
        result = CliRunner().invoke(cli, ['convert', str(svg)])
        assert result.exit_code != 0
        assert 'output' in result.output.lower()

    def test_convert_missing_input(self, tmp_path):
        result = CliRunner().invoke(cli, ['convert', '/nonexistent/a.svg', '-o', str(tmp_path)])
        assert result.exit_code == 1
        assert 'not found' in result.output.lower()

    def test_convert_without_blender(self, tmp_path):
        svg = tmp_path / "a.svg"
        svg.write_text("<svg/>")
        result = CliRunner().invoke(cli, [
            'convert', str(svg), '-o', str(tmp_path / "out"),
            '--blender', str(tmp_path / "no-blender"),
        ])
        assert result.exit_code == 1
        assert 'Blender was not installed or detected' in result.output

    def test_convert_rejects_bad_row_size(self, tmp_path):
        svg = tmp_path / "a.svg"
        svg.write_text("<svg/>")
        result = CliRunner().invoke(cli, ['convert', str(svg), '-o', str(tmp_path), '--row-size', '0'])
        assert result.exit_code == 1
        assert 'Invalid option' in result.output

    @posix_only
    def test_convert_with_fake_blender(self, tmp_path, make_fake_blender):
        blender, _ = make_fake_blender()
        svg = tmp_path / "logo.svg"
        svg.write_text("<svg/>")
        png = tmp_path / "photo.png"
        png.write_bytes(b"\x89PNG")
        out_dir = tmp_path / "out"

        result = CliRunner().invoke(cli, [
            'convert', str(svg), str(png), '-o', str(out_dir),
            '--blender', blender, '--cache-dir', str(tmp_path / "cache"), '-v',
        ])

        assert result.exit_code == 0, result.output
        assert 'Success' in result.output
        assert 'Skipped (not an SVG)' in result.output
        assert (out_dir / "logo.glb").exists()

    @posix_only
    def test_convert_reports_failures(self, tmp_path, make_fake_blender):
        blender, _ = make_fake_blender(exit_code=2, write_output=False)
        svg = tmp_path / "logo.svg"
        svg.write_text("<svg/>")

        result = CliRunner().invoke(cli, [
            'convert', str(svg), '-o', str(tmp_path / "out"),
            '--blender', blender, '--cache-dir', str(tmp_path / "cache"),
        ])

        assert result.exit_code == 1
        assert 'rc=2' in result.output

    def test_script_command(self):
        result = CliRunner().invoke(cli, ['script', 'logo.svg', 'logo.glb'])
        assert result.exit_code == 0
        ast.parse(result.output)
        assert "INPUT_PATH = 'logo.svg'" in result.output

    def test_doctor_without_blender(self, tmp_path):
        result = CliRunner().invoke(cli, ['doctor', '--blender', str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert 'Blender not found' in result.output

    @posix_only
    def test_doctor_with_blender(self, make_fake_blender):
        blender, _ = make_fake_blender()
        result = CliRunner().invoke(cli, ['doctor', '--blender', blender])
        assert result.exit_code == 0
        assert 'Blender found' in result.output
        assert 'Blender 4.1.0 (fake)' in result.output
