"""Interactive message components: action rows and buttons."""

from __future__ import annotations

import enum
import logging
from typing import Any

from pydantic import BaseModel, Field

from .errors import UnknownComponentError
from .wire import (
    bool_not_null,
    int_not_null,
    object_list,
    object_or_none,
    snowflake_not_null,
    string_not_null,
)

MAX_LABEL = 80
MAX_CUSTOM_ID = 100
MAX_URL = 512

log = logging.getLogger("chatcache.component")


class ComponentType(enum.IntEnum):
    ACTION_ROW = 1
    BUTTON = 2


class ComponentStyle(enum.IntEnum):
    PRIMARY = 1
    SECONDARY = 2
    SUCCESS = 3
    DANGER = 4
    LINK = 5


class Mutation(enum.Enum):
    LABEL = "label"
    STYLE = "style"
    CUSTOM_ID = "custom_id"
    URL = "url"
    EMOJI = "emoji"
    DISABLED = "disabled"
    ADD_COMPONENT = "add_component"


_BUTTON_FIELDS = (Mutation.LABEL, Mutation.STYLE, Mutation.CUSTOM_ID, Mutation.URL, Mutation.EMOJI)

# (current type, mutation) -> type after the mutation
RETAG: dict[tuple[ComponentType, Mutation], ComponentType] = {}
for _current in ComponentType:
    for _mutation in _BUTTON_FIELDS:
        RETAG[_current, _mutation] = ComponentType.BUTTON
    RETAG[_current, Mutation.ADD_COMPONENT] = ComponentType.ACTION_ROW
    RETAG[_current, Mutation.DISABLED] = _current
del _current, _mutation


def _enum_value(enum_cls, data: dict[str, Any], key: str, default):
    raw = int_not_null(data, key)
    try:
        return enum_cls(raw or default)
    except ValueError:
        raise UnknownComponentError(key, raw) from None


class ComponentEmoji(BaseModel):
    """Unicode emoji by ``name`` or a custom guild emoji by ``id``."""

    name: str = ""
    id: int = 0
    animated: bool = False

    def to_json_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.id:
            out["id"] = str(self.id)
            out["animated"] = self.animated
        return out


class Component(BaseModel):
    """A node in a component tree.

    A fresh component is an action row. Setting a button field retags it
    as a button and adding a child retags it as an action row, following
    :data:`RETAG`. Nothing stops a caller from building an inconsistent
    tree; :meth:`validation_issues` reports such problems.
    """

    type: ComponentType = ComponentType.ACTION_ROW
    components: list[Component] = Field(default_factory=list)
    label: str = ""
    style: ComponentStyle = ComponentStyle.PRIMARY
    custom_id: str = ""
    url: str = ""
    disabled: bool = False
    emoji: ComponentEmoji | None = None

    def _apply(self, mutation: Mutation) -> Component:
        self.type = RETAG[self.type, mutation]
        return self

    def set_type(self, component_type: ComponentType) -> Component:
        self.type = component_type
        return self

    def set_label(self, label: str) -> Component:
        self.label = label[:MAX_LABEL]
        return self._apply(Mutation.LABEL)

    def set_style(self, style: ComponentStyle) -> Component:
        self.style = style
        return self._apply(Mutation.STYLE)

    def set_id(self, custom_id: str) -> Component:
        self.custom_id = custom_id[:MAX_CUSTOM_ID]
        return self._apply(Mutation.CUSTOM_ID)

    def set_url(self, url: str) -> Component:
        self.url = url[:MAX_URL]
        self.style = ComponentStyle.LINK
        return self._apply(Mutation.URL)

    def set_disabled(self, disabled: bool) -> Component:
        self.disabled = disabled
        return self._apply(Mutation.DISABLED)

    def set_emoji(self, name: str = "", id: int = 0, animated: bool = False) -> Component:
        if not name and not id:
            raise ValueError("an emoji needs a name or an id")
        self.emoji = ComponentEmoji(name=name, id=id, animated=animated)
        return self._apply(Mutation.EMOJI)

    def add_component(self, child: Component) -> Component:
        self.components.append(child)
        return self._apply(Mutation.ADD_COMPONENT)

    # ------------------------------------------------------------------
    def validation_issues(self) -> list[str]:
        """Return human readable problems with this tree, empty if none."""
        issues: list[str] = []
        if self.type == ComponentType.ACTION_ROW:
            if not self.components:
                issues.append("action row has no components")
            for child in self.components:
                if child.type == ComponentType.ACTION_ROW:
                    issues.append("action row nested inside an action row")
                issues.extend(child.validation_issues())
            return issues

        name = self.label or self.custom_id or self.url or "button"
        if self.components:
            issues.append(f"{name}: button has child components")
        if self.style == ComponentStyle.LINK:
            if not self.url:
                issues.append(f"{name}: link button without url")
            if self.custom_id:
                issues.append(f"{name}: link button with custom_id")
        else:
            if self.url:
                issues.append(f"{name}: url set on a non-link button")
            if not self.custom_id:
                issues.append(f"{name}: button without custom_id")
        return issues

    def fill_from_json(self, data: dict[str, Any]) -> Component:
        self.type = _enum_value(ComponentType, data, "type", ComponentType.ACTION_ROW)
        if self.type == ComponentType.ACTION_ROW:
            self.components = components_from_json(object_list(data, "components"))
            return self
        self.label = string_not_null(data, "label")
        self.style = _enum_value(ComponentStyle, data, "style", ComponentStyle.PRIMARY)
        self.custom_id = string_not_null(data, "custom_id")
        self.url = string_not_null(data, "url")
        self.disabled = bool_not_null(data, "disabled")
        emoji = object_or_none(data, "emoji")
        if emoji is not None:
            self.emoji = ComponentEmoji(
                name=string_not_null(emoji, "name"),
                id=snowflake_not_null(emoji, "id"),
                animated=bool_not_null(emoji, "animated"),
            )
        return self

    def to_json_dict(self) -> dict[str, Any]:
        if self.type == ComponentType.ACTION_ROW:
            return {
                "type": int(self.type),
                "components": [c.to_json_dict() for c in self.components],
            }
        out: dict[str, Any] = {
            "type": int(self.type),
            "label": self.label,
            "style": int(self.style),
            "disabled": self.disabled,
        }
        if self.custom_id:
            out["custom_id"] = self.custom_id
        if self.url:
            out["url"] = self.url
        if self.emoji is not None:
            out["emoji"] = self.emoji.to_json_dict()
        return out


def components_from_json(fragments: list[dict[str, Any]]) -> list[Component]:
    """Parse sibling components, skipping kinds this library does not model."""
    parsed: list[Component] = []
    for fragment in fragments:
        try:
            parsed.append(Component().fill_from_json(fragment))
        except UnknownComponentError as exc:
            log.warning("skipping component: %s", exc)
    return parsed
