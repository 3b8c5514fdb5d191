"""Custom exceptions for SVG conversion"""

from typing import Optional


class SvgSmithError(Exception):
    """Base exception for conversion errors"""
    pass


class ToolUnavailableError(SvgSmithError):
    """Blender is not installed, not found, or not executable"""
    pass


class UnsupportedCharactersError(SvgSmithError):
    """File name contains characters Blender's SVG importer cannot take"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Imported SVG cannot have unicode characters in its file name: {path}")


class ConversionFailedError(SvgSmithError):
    """Blender exited with a non-zero status"""

    def __init__(self, exit_code: int, output: str = ""):
        self.exit_code = exit_code
        self.output = output
        message = f"Blender conversion failed: rc={exit_code}"
        if output:
            message += f"\nOUTPUT:\n{output}"
        super().__init__(message)


class RunnerFaultError(SvgSmithError):
    """Unexpected failure while launching or awaiting Blender"""
    pass


class RegistrationError(SvgSmithError):
    """Could not hook the SVG handler into the host's import registry"""

    def __init__(self, extension: str, reason: Optional[str] = None):
        self.extension = extension
        message = f"Failed to register import handler for .{extension}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
