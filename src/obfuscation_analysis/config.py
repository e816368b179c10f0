"""Configuration loading and management for Obfuscation Analysis.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.obfuscation-analysis.toml)
    3. Project config (./obfuscation-analysis.toml)
    4. Explicit config file
    5. Environment variables (OBFA_* prefix)
    6. CLI overrides (passed as kwargs)

Tool commands live in a ``[tools]`` table.  Each command is a list of
arguments; ``{input}``, ``{output}`` and ``{output_dir}`` are substituted per
artifact:

    [tools]
    compiler = ["javac", "{input}"]
    extractor = ["java", "-jar", "analyzer.jar", "{input}"]

    [tools.transformers]
    jshrink = ["java", "-jar", "jshrink.jar", "-i", "{input}", "-o", "{output_dir}"]
    proguard = ["proguard", "-injars", "{input}", "-outjars", "{output}"]
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .models import TransformationKind

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["text", "rich"]

_ENV_PREFIX = "OBFA_"
_PLACEHOLDER_INPUT = "{input}"


def _default_transformers() -> Dict[str, List[str]]:
    return {
        TransformationKind.JSHRINK.value: [
            "java", "-jar", "jshrink.jar", "--input", "{input}", "--output", "{output_dir}",
        ],
        TransformationKind.PROGUARD.value: [
            "proguard", "-injars", "{input}", "-outjars", "{output}", "-dontwarn",
        ],
    }


@dataclass(frozen=True)
class ToolConfig:
    """Command templates for the external tools.

    Attributes:
        compiler: Compiles one source artifact next to itself
        extractor: Prints a JSON structural summary of one compiled artifact
        transformers: Obfuscator command per transformation kind value
    """

    compiler: List[str] = field(default_factory=lambda: ["javac", "{input}"])
    extractor: List[str] = field(
        default_factory=lambda: ["java", "-jar", "structure-analyzer.jar", "{input}"]
    )
    transformers: Dict[str, List[str]] = field(default_factory=_default_transformers)

    def __post_init__(self) -> None:
        for name, command in (("compiler", self.compiler), ("extractor", self.extractor)):
            _validate_command(f"tools.{name}", command)

        known = {kind.value for kind in TransformationKind.variants()}
        for kind_name, command in self.transformers.items():
            if kind_name not in known:
                raise InvalidConfigError(
                    f"tools.transformers.{kind_name}",
                    kind_name,
                    f"expected one of {', '.join(sorted(known))}",
                )
            _validate_command(f"tools.transformers.{kind_name}", command)

    def transformer_for(self, kind: TransformationKind) -> Optional[List[str]]:
        return self.transformers.get(kind.value)


def _validate_command(key: str, command: Any) -> None:
    if not isinstance(command, list) or not command:
        raise InvalidConfigError(key, command, "must be a non-empty list of arguments")
    if not all(isinstance(arg, str) for arg in command):
        raise InvalidConfigError(key, command, "every argument must be a string")
    if not any(_PLACEHOLDER_INPUT in arg for arg in command):
        raise InvalidConfigError(key, command, f"must reference {_PLACEHOLDER_INPUT}")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        Artifact discovery:
            source_type: Source file extension without the dot (``java``)
            compiled_suffix: Suffix of compiled artifacts (``.class``)
            exclude_patterns: Glob patterns skipped during collection
            follow_symlinks: Follow symbolic links during collection

        Tool execution:
            transform_output_dir: Where obfuscated artifacts are written
            tool_timeout_seconds: Per-invocation timeout (None = wait forever)
            tools: Command templates (see ToolConfig)

        Output control:
            output_format: Report renderer, ``text`` or ``rich``
            verbosity: Logging verbosity level
            cleanup_enabled: Delete compiled baselines after reporting
    """

    source_type: str = "java"
    compiled_suffix: str = ".class"
    exclude_patterns: List[str] = field(
        default_factory=lambda: [".git/*", "build/*", "target/*", "out/*"]
    )
    follow_symlinks: bool = False

    transform_output_dir: str = ".obfuscation-out"
    tool_timeout_seconds: Optional[int] = None
    tools: ToolConfig = field(default_factory=ToolConfig)

    output_format: OutputFormat = "text"
    verbosity: Verbosity = "normal"
    cleanup_enabled: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.source_type or self.source_type.startswith("."):
            raise InvalidConfigError("source_type", self.source_type, "give the extension without a dot")
        if not self.compiled_suffix.startswith("."):
            raise InvalidConfigError("compiled_suffix", self.compiled_suffix, "must start with '.'")
        if self.source_suffix == self.compiled_suffix:
            raise InvalidConfigError(
                "compiled_suffix", self.compiled_suffix, "must differ from the source suffix"
            )
        if self.tool_timeout_seconds is not None and self.tool_timeout_seconds < 1:
            raise InvalidConfigError("tool_timeout_seconds", self.tool_timeout_seconds, "must be at least 1")
        if self.output_format not in ("text", "rich"):
            raise InvalidConfigError("output_format", self.output_format, "expected 'text' or 'rich'")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")

    @property
    def source_suffix(self) -> str:
        return f".{self.source_type}"

    def compiled_path_for(self, source: Path) -> Path:
        """Where the compiler leaves the artifact built from ``source``."""
        return compiled_path_for(source, self.source_suffix, self.compiled_suffix)


def compiled_path_for(source: Path, source_suffix: str, compiled_suffix: str) -> Path:
    """Swap the source suffix of ``source`` for the compiled one."""
    name = source.name
    stem = name[: -len(source_suffix)] if name.endswith(source_suffix) else source.stem
    return source.with_name(stem + compiled_suffix)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing

    Example:
        >>> config = load_config(verbose=True)
        >>> config.verbosity
        'verbose'
    """
    merged: dict = {}

    global_config = Path.home() / ".obfuscation-analysis.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config, "global config"))

    project_config = Path.cwd() / "obfuscation-analysis.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Boolean CLI flags map onto the verbosity literal
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    tools_dict = merged.pop("tools", None)
    if tools_dict is not None:
        if isinstance(tools_dict, ToolConfig):
            merged["tools"] = tools_dict
        elif isinstance(tools_dict, dict):
            try:
                merged["tools"] = ToolConfig(**_merge_transformers(tools_dict))
            except TypeError as e:
                raise ConfigurationError(f"Invalid [tools] config: {e}")
        else:
            raise InvalidConfigError("tools", tools_dict, "must be a table")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_transformers(tools_dict: dict) -> dict:
    """Let a config override one transformer without dropping the other."""
    result = dict(tools_dict)
    if "transformers" in result:
        transformers = _default_transformers()
        transformers.update(result["transformers"])
        result["transformers"] = transformers
    return result


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from OBFA_* environment variables.

    Supported environment variables:
        OBFA_SOURCE_TYPE: str
        OBFA_COMPILED_SUFFIX: str
        OBFA_FOLLOW_SYMLINKS: bool (true/false/1/0)
        OBFA_TRANSFORM_OUTPUT_DIR: str
        OBFA_TOOL_TIMEOUT_SECONDS: int
        OBFA_OUTPUT_FORMAT: text/rich
        OBFA_VERBOSITY: quiet/normal/verbose
        OBFA_CLEANUP_ENABLED: bool

    List and table fields are not settable from the environment.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{_ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot come from the environment.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin in (list, dict) or type_hint is ToolConfig:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path, label: str) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")
