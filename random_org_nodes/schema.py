"""
Declarative node schema consumed by the host UI.

A node publishes one NodeDefinition listing its parameters. Each
ParameterDefinition carries the UI type, default, allowed options or
numeric range, and the display conditions that hide it for other
operations. Definitions serialize to plain dicts for the host.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


class ParameterType:
    OPTIONS = "options"
    NUMBER = "number"

    _ALL = {OPTIONS, NUMBER}

    @classmethod
    def validate(cls, param_type: str) -> str:
        if param_type not in cls._ALL:
            raise ValueError(f"Invalid parameter type: {param_type}. Must be one of {cls._ALL}")
        return param_type


def humanize(name: str) -> str:
    words: list[str] = []
    current = ""
    for ch in name.replace("_", " "):
        if ch == " ":
            if current:
                words.append(current)
            current = ""
        elif ch.isupper() and current and not current[-1].isupper():
            words.append(current)
            current = ch
        else:
            current += ch
    if current:
        words.append(current)
    return " ".join(w.capitalize() for w in words)


@dataclass
class ParameterOption:
    name: str
    value: str
    description: str = ""
    action: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.description:
            d["description"] = self.description
        if self.action is not None:
            d["action"] = self.action
        return d


@dataclass
class ParameterDefinition:
    name: str
    display_name: str
    param_type: str
    default: Any = None
    description: str = ""
    required: bool = False
    no_data_expression: bool = False
    options: list[ParameterOption] = field(default_factory=list)
    range: tuple[float, float] | None = None
    show_for: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ParameterType.validate(self.param_type)

    @classmethod
    def options_param(
        cls,
        name: str,
        options: list[ParameterOption],
        *,
        default: str | None = None,
        description: str = "",
        display_name: str | None = None,
    ) -> ParameterDefinition:
        if not options:
            raise ValueError(f"Options parameter '{name}' needs at least one option")
        return cls(
            name=name,
            display_name=display_name or humanize(name),
            param_type=ParameterType.OPTIONS,
            default=default if default is not None else options[0].value,
            description=description,
            options=list(options),
        )

    @classmethod
    def number_param(
        cls,
        name: str,
        *,
        default: float | None = None,
        description: str = "",
        display_name: str | None = None,
    ) -> ParameterDefinition:
        return cls(
            name=name,
            display_name=display_name or humanize(name),
            param_type=ParameterType.NUMBER,
            default=default,
            description=description,
        )

    def with_range(self, min_val: float, max_val: float) -> ParameterDefinition:
        if min_val > max_val:
            raise ValueError(f"Invalid range for '{self.name}': {min_val} > {max_val}")
        self.range = (min_val, max_val)
        return self

    def with_required(self, required: bool = True) -> ParameterDefinition:
        self.required = required
        return self

    def with_no_data_expression(self) -> ParameterDefinition:
        self.no_data_expression = True
        return self

    def show_when(self, parameter: str, values: list[str]) -> ParameterDefinition:
        self.show_for[parameter] = list(values)
        return self

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.param_type,
            "default": self.default,
        }
        if self.description:
            d["description"] = self.description
        if self.required:
            d["required"] = True
        if self.no_data_expression:
            d["noDataExpression"] = True
        if self.options:
            d["options"] = [o.to_dict() for o in self.options]
        if self.range is not None:
            d["typeOptions"] = {"minValue": self.range[0], "maxValue": self.range[1]}
        if self.show_for:
            d["displayOptions"] = {"show": dict(self.show_for)}
        return d


@dataclass
class NodeDefinition:
    name: str
    display_name: str
    description: str
    group: str
    icon: str | None = None
    subtitle: str | None = None
    version: int = 1
    parameters: list[ParameterDefinition] = field(default_factory=list)

    def add_parameter(self, parameter: ParameterDefinition) -> NodeDefinition:
        if any(p.name == parameter.name for p in self.parameters):
            raise ValueError(f"Duplicate parameter '{parameter.name}' on node '{self.name}'")
        self.parameters.append(parameter)
        return self

    def get_parameter(self, name: str) -> ParameterDefinition | None:
        for p in self.parameters:
            if p.name == name:
                return p
        return None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "group": [self.group],
            "version": self.version,
            "description": self.description,
            "defaults": {"name": self.display_name},
            "inputs": ["main"],
            "outputs": ["main"],
            "properties": [p.to_dict() for p in self.parameters],
        }
        if self.icon is not None:
            d["icon"] = self.icon
        if self.subtitle is not None:
            d["subtitle"] = self.subtitle
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


__all__ = [
    "ParameterType",
    "ParameterOption",
    "ParameterDefinition",
    "NodeDefinition",
    "humanize",
]
