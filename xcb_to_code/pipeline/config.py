"""
Configuration for the code generator pipeline.

Holds the wire size tables the resolver needs plus formatter and
output options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Byte widths of the X protocol base types
DEFAULT_BASE_TYPE_SIZES: dict[str, int] = {
    "CARD8": 1,
    "CARD16": 2,
    "CARD32": 4,
    "CARD64": 8,
    "INT8": 1,
    "INT16": 2,
    "INT32": 4,
    "INT64": 8,
    "BYTE": 1,
    "BOOL": 1,
    "char": 1,
    "void": 1,
    "float": 4,
    "double": 8,
}

# Every resource (XID) is a CARD32 on the wire
DEFAULT_RESOURCE_TYPE_SIZE = 4


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the gofmt post-processing step."""

    # Whether formatting is enabled
    enabled: bool = False

    # gofmt executable
    gofmt_path: str = "gofmt"

    # Simplify code (gofmt -s)
    simplify: bool = False


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Base type name -> wire size in bytes
    base_type_sizes: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_BASE_TYPE_SIZES))

    # Wire size shared by every resource type
    resource_type_size: int = DEFAULT_RESOURCE_TYPE_SIZE

    # Directory holding imported descriptions (empty = next to the root document)
    proto_path: str = ""

    # Go package of the generated file
    package_name: str = "xgb"

    # Add generation comment at top of file
    add_generation_comment: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "base_type_sizes" and isinstance(v, dict):
                config.base_type_sizes = {str(name): int(size) for name, size in v.items()}
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "base_type_sizes": dict(self.base_type_sizes),
            "resource_type_size": self.resource_type_size,
            "proto_path": self.proto_path,
            "package_name": self.package_name,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "gofmt_path": self.formatter.gofmt_path,
                "simplify": self.formatter.simplify,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
