"""
Attribute schemas for the provider, its resources and data sources.

A schema describes each attribute (required/optional/computed, default,
sensitivity, replacement on change) and carries the validators a plan must
pass before any API call is made.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from influxdb3_provider.diagnostics import Diagnostics


class Unknown:
    """Marker for a configuration value that is not known until apply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown()

# A validator returns an error message, or None when the value is acceptable
Validator = Callable[[Any], Optional[str]]


def length_between(min_length: int, max_length: int) -> Validator:
    def validate(value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return f"Attribute must be a string, got: {value!r}"
        if not min_length <= len(value) <= max_length:
            return (
                f"Attribute string length must be between {min_length} and "
                f"{max_length}, got: {len(value)}"
            )
        return None

    return validate


def one_of(*allowed: str) -> Validator:
    def validate(value: Any) -> Optional[str]:
        if value not in allowed:
            options = ", ".join(f'"{option}"' for option in allowed)
            return f"Attribute value must be one of: [{options}], got: {value!r}"
        return None

    return validate


def unique_values() -> Validator:
    def validate(value: Any) -> Optional[str]:
        seen = set()
        for index, item in enumerate(value or []):
            key = json.dumps(item, sort_keys=True, default=str)
            if key in seen:
                return f"This attribute contains duplicate values of: element {index}"
            seen.add(key)
        return None

    return validate


def size_between(min_size: int, max_size: int) -> Validator:
    def validate(value: Any) -> Optional[str]:
        size = len(value or [])
        if not min_size <= size <= max_size:
            return (
                f"Attribute list must contain at least {min_size} elements and at "
                f"most {max_size} elements, got: {size}"
            )
        return None

    return validate


@dataclass
class Attribute:
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    default: Any = None
    requires_replace: bool = False
    validators: List[Validator] = field(default_factory=list)
    # Attributes of each element of a nested list attribute
    nested: Optional[Dict[str, "Attribute"]] = None


@dataclass
class Schema:
    description: str
    attributes: Dict[str, Attribute]

    def validate(self, values: Dict[str, Any]) -> Diagnostics:
        """Check required attributes and run every validator."""
        diagnostics = Diagnostics()
        self._validate_attributes(self.attributes, values, "", diagnostics)
        return diagnostics

    def _validate_attributes(
        self,
        attributes: Dict[str, Attribute],
        values: Dict[str, Any],
        prefix: str,
        diagnostics: Diagnostics,
    ) -> None:
        for name, attribute in attributes.items():
            path = f"{prefix}{name}"
            value = values.get(name)

            if value is None:
                if attribute.required:
                    diagnostics.add_attribute_error(
                        path,
                        "Missing required argument",
                        f'The argument "{path}" is required, but no definition was found.',
                    )
                continue
            if value is UNKNOWN:
                continue

            for validator in attribute.validators:
                message = validator(value)
                if message:
                    diagnostics.add_attribute_error(
                        path, "Invalid Attribute Value", message
                    )

            if attribute.nested and isinstance(value, list):
                for index, item in enumerate(value):
                    if isinstance(item, dict):
                        self._validate_attributes(
                            attribute.nested, item, f"{path}[{index}].", diagnostics
                        )

    def apply_defaults(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of values with defaults filled in for unset attributes."""
        result = dict(values)
        for name, attribute in self.attributes.items():
            if result.get(name) is None and attribute.default is not None:
                result[name] = attribute.default
        return result

    def requires_replace(
        self, state: Dict[str, Any], plan: Dict[str, Any]
    ) -> List[str]:
        """List the attributes whose change forces the resource to be recreated."""
        changed = []
        for name, attribute in self.attributes.items():
            if not attribute.requires_replace:
                continue
            planned = plan.get(name)
            if planned is UNKNOWN:
                continue
            if planned != state.get(name):
                changed.append(name)
        return changed
