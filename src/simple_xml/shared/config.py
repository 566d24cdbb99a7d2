"""Configuration classes for simple-xml.

This module provides the configuration objects that control parsing limits,
serialization layout and document-level rules.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

VALID_LINE_ENDINGS = ("\r\n", "\n", "")
VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_COMPONENTS = ["parsing", "serialization", "document"]


@dataclass
class ParsingConfig:
    """Configuration for the recursive-descent parser."""

    max_depth: int = 256
    max_input_size: Optional[int] = None
    decode_numeric_entities: bool = True
    skip_xml_declaration: bool = True

    def __post_init__(self) -> None:
        """Validate parsing configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if self.max_input_size is not None and self.max_input_size <= 0:
            raise ValueError("max_input_size must be > 0 or None")


@dataclass
class SerializationConfig:
    """Configuration for text output layout."""

    indent_unit: str = "  "
    line_ending: str = "\r\n"

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        if self.indent_unit.strip():
            raise ValueError("indent_unit must contain only whitespace")
        if self.line_ending not in VALID_LINE_ENDINGS:
            raise ValueError(f"line_ending must be one of {list(VALID_LINE_ENDINGS)}")


@dataclass
class DocumentConfig:
    """Configuration for document-level rules."""

    # Exactly one top-level tag, enforced by add_tag and parse_document
    single_root: bool = True


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class SimpleXMLConfig:
    """Complete configuration for a SimpleXML document.

    Immutable; use ``override`` to derive a modified copy.
    """

    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)

    logging_level: str = "INFO"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.parsing.__post_init__()
            self.serialization.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=["Use an upper-case standard logging level name"],
            )

    def override(self, **kwargs: Any) -> "SimpleXMLConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use the
                ``component__field`` notation

        Returns:
            New SimpleXMLConfig instance with overrides applied

        Example:
            >>> config = SimpleXMLConfig()
            >>> config.override(serialization__line_ending="\\n").serialization.line_ending
            '\\n'
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {_COMPONENTS}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENTS and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        try:
            return replace(self, **new_fields)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "parsing": dict(vars(self.parsing)),
            "serialization": dict(vars(self.serialization)),
            "document": dict(vars(self.document)),
            "logging_level": self.logging_level,
            "correlation_id": self.correlation_id,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimpleXMLConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than ignored.
        """
        component_types = {
            "parsing": ParsingConfig,
            "serialization": SerializationConfig,
            "document": DocumentConfig,
        }
        values: Dict[str, Any] = {}
        for key, value in data.items():
            try:
                if key in component_types:
                    values[key] = component_types[key](**value)
                elif key in ("logging_level", "correlation_id"):
                    values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {key}", field_name=key
                    )
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=key) from e

        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "SimpleXMLConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "SimpleXMLConfig":
        """Two-space indentation, CRLF line endings, single root."""
        return cls()

    @classmethod
    def compact(cls) -> "SimpleXMLConfig":
        """Everything on one line, no indentation."""
        return cls(serialization=SerializationConfig(indent_unit="", line_ending=""))

    @classmethod
    def unix(cls) -> "SimpleXMLConfig":
        """LF line endings."""
        return cls(serialization=SerializationConfig(line_ending="\n"))

    @classmethod
    def lenient(cls) -> "SimpleXMLConfig":
        """Allow any number of top-level tags."""
        return cls(document=DocumentConfig(single_root=False))
