"""Pydantic models for configuration schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

ColorSpec = str | int | dict[str, Any]


class CategoryConfig(BaseModel):
    """Category definition: a color and the rule kinds that match its files.

    Neither the color nor the rule kinds are validated here: a category with
    a bad color, wrongly typed rule kinds, no kind or conflicting kinds is
    reported when it is registered, so that it cannot keep the other
    categories from loading.
    """

    name: str = Field(default="", description="Category identifier")
    color: Any = Field(
        default=None, description="Color spec like 'bold #ce5c00' or {fg: ..., bg: ...}"
    )
    extensions: Any = Field(default=None, description="Bare extensions, case-sensitive")
    filenames: Any = Field(default=None, description="Literal filename fragments")
    regexps: Any = Field(default=None, description="Regexps matched against the filename")
    regexp: Any = Field(default=None, description="Regexp matched against the full listing line")

    def rule_kinds(self) -> dict[str, Any]:
        """Return the rule kinds that were given."""
        kinds = {
            "extensions": self.extensions,
            "filenames": self.filenames,
            "regexps": self.regexps,
            "regexp": self.regexp,
        }
        return {kind: value for kind, value in kinds.items() if value is not None}

    @property
    def has_rule(self) -> bool:
        return bool(self.rule_kinds())


class Theme(BaseModel):
    """Theme: color overrides for categories."""

    name: str = Field(description="Theme name")
    categories: dict[str, Any] = Field(
        default_factory=dict, description="Category identifier to color mapping"
    )

    @field_validator("categories", mode="before")
    @classmethod
    def lower_keys(cls, v: dict[str, Any] | None) -> dict[str, Any]:
        if not v:
            return {}
        if not isinstance(v, dict):
            raise ValueError("theme categories must be a mapping of identifier to color")
        return {str(name).lower(): color for name, color in v.items()}


class GlobalConfig(BaseModel):
    """Global configuration options."""

    color: bool = Field(default=True, description="Enable/disable colors")
    theme: str | None = Field(default=None, description="Theme selected by default")
    listing_switches: str = Field(default="-al", description="Switches passed to ls")


class Config(BaseModel):
    """Top-level configuration."""

    config: GlobalConfig = Field(default_factory=GlobalConfig)
    categories: dict[str, CategoryConfig] = Field(default_factory=dict)
    order: list[str] = Field(
        default_factory=list, description="Registration order; later categories win on overlap"
    )
    disabled: list[str] = Field(default_factory=list, description="Categories not to install")
    themes: dict[str, Theme] = Field(default_factory=dict)
    keybindings: dict[str, str] = Field(
        default_factory=dict, description="Viewer key to command mapping"
    )

    @field_validator("categories", mode="before")
    @classmethod
    def parse_categories(cls, v: dict[str, Any] | None) -> dict[str, CategoryConfig]:
        """Parse category definitions; a bare value is a color."""
        if v is not None and not isinstance(v, dict):
            raise ValueError("categories must be a mapping of identifier to definition")
        result = {}
        for name, data in (v or {}).items():
            key = str(name).lower()
            if isinstance(data, CategoryConfig):
                result[key] = data
            elif isinstance(data, dict):
                entries = {str(entry): value for entry, value in data.items()}
                result[key] = CategoryConfig.model_validate({**entries, "name": key})
            else:
                result[key] = CategoryConfig(name=key, color=data)
        return result

    @field_validator("themes", mode="before")
    @classmethod
    def parse_themes(cls, v: dict[str, Any] | None) -> dict[str, Theme]:
        """Parse theme definitions."""
        if v is not None and not isinstance(v, dict):
            raise ValueError("themes must be a mapping of name to theme")
        result = {}
        for name, data in (v or {}).items():
            if isinstance(data, dict):
                result[str(name).lower()] = Theme(name=str(name), categories=data.get("categories", {}))
        return result

    @field_validator("order", "disabled", mode="before")
    @classmethod
    def lower_identifiers(cls, v: list[str] | None) -> list[str]:
        return [str(name).lower() for name in (v or [])]

    def get_theme(self, name: str | None = None) -> Theme | None:
        """Get theme by name, falling back to the configured default theme."""
        name = name or self.config.theme
        if name and name.lower() in self.themes:
            return self.themes[name.lower()]
        return None
