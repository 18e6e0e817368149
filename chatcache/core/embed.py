"""Rich embeds attached to messages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .wire import (
    bool_not_null,
    int_not_null,
    object_list,
    object_or_none,
    string_not_null,
    ts_not_null,
    ts_to_iso,
)

MAX_TITLE = 256
MAX_DESCRIPTION = 2048
MAX_FIELD_NAME = 256
MAX_FIELD_VALUE = 1000
MAX_FOOTER_TEXT = 2048
MAX_AUTHOR_NAME = 256
MAX_FIELDS = 25


class EmbedFooter(BaseModel):
    text: str = ""
    icon_url: str = ""
    proxy_url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmbedFooter:
        return cls(
            text=string_not_null(data, "text"),
            icon_url=string_not_null(data, "icon_url"),
            proxy_url=string_not_null(data, "proxy_icon_url"),
        )

    def to_json_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"text": self.text}
        if self.icon_url:
            out["icon_url"] = self.icon_url
        return out


class EmbedImage(BaseModel):
    """Image, thumbnail or video of an embed."""

    url: str = ""
    proxy_url: str = ""
    height: int = 0
    width: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmbedImage:
        return cls(
            url=string_not_null(data, "url"),
            proxy_url=string_not_null(data, "proxy_url"),
            height=int_not_null(data, "height"),
            width=int_not_null(data, "width"),
        )

    def to_json_dict(self) -> dict[str, Any]:
        return {"url": self.url}


class EmbedProvider(BaseModel):
    name: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmbedProvider:
        return cls(name=string_not_null(data, "name"), url=string_not_null(data, "url"))

    def to_json_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}


class EmbedAuthor(BaseModel):
    name: str = ""
    url: str = ""
    icon_url: str = ""
    proxy_icon_url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmbedAuthor:
        return cls(
            name=string_not_null(data, "name"),
            url=string_not_null(data, "url"),
            icon_url=string_not_null(data, "icon_url"),
            proxy_icon_url=string_not_null(data, "proxy_icon_url"),
        )

    def to_json_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.url:
            out["url"] = self.url
        if self.icon_url:
            out["icon_url"] = self.icon_url
        return out


class EmbedField(BaseModel):
    name: str = ""
    value: str = ""
    is_inline: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EmbedField:
        return cls(
            name=string_not_null(data, "name"),
            value=string_not_null(data, "value"),
            is_inline=bool_not_null(data, "inline"),
        )

    def to_json_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.is_inline}


class Embed(BaseModel):
    """A rich embed.

    Optional parts are ``None`` when absent, so an empty footer stays
    distinguishable from no footer at all. Setters return the embed so
    calls can be chained and truncate text to the platform limits.
    """

    title: str = ""
    type: str = ""
    description: str = ""
    url: str = ""
    timestamp: int = 0
    color: int = 0
    footer: EmbedFooter | None = None
    image: EmbedImage | None = None
    thumbnail: EmbedImage | None = None
    video: EmbedImage | None = None
    provider: EmbedProvider | None = None
    author: EmbedAuthor | None = None
    fields: list[EmbedField] = Field(default_factory=list)

    def fill_from_json(self, data: dict[str, Any]) -> Embed:
        self.title = string_not_null(data, "title")
        self.type = string_not_null(data, "type")
        self.description = string_not_null(data, "description")
        self.url = string_not_null(data, "url")
        self.timestamp = ts_not_null(data, "timestamp")
        self.color = int_not_null(data, "color")
        footer = object_or_none(data, "footer")
        self.footer = EmbedFooter.from_json(footer) if footer is not None else None
        for key in ("image", "thumbnail", "video"):
            part = object_or_none(data, key)
            setattr(self, key, EmbedImage.from_json(part) if part is not None else None)
        provider = object_or_none(data, "provider")
        self.provider = EmbedProvider.from_json(provider) if provider is not None else None
        author = object_or_none(data, "author")
        self.author = EmbedAuthor.from_json(author) if author is not None else None
        self.fields = [EmbedField.from_json(f) for f in object_list(data, "fields")]
        return self

    # ------------------------------------------------------------------
    # Builders
    def set_title(self, text: str) -> Embed:
        self.title = text[:MAX_TITLE]
        return self

    def set_description(self, text: str) -> Embed:
        self.description = text[:MAX_DESCRIPTION]
        return self

    def set_color(self, color: int) -> Embed:
        self.color = color
        return self

    def set_url(self, url: str) -> Embed:
        self.url = url
        return self

    def set_timestamp(self, ts: int) -> Embed:
        self.timestamp = ts
        return self

    def set_footer(self, text: str, icon_url: str = "") -> Embed:
        self.footer = EmbedFooter(text=text[:MAX_FOOTER_TEXT], icon_url=icon_url)
        return self

    def add_field(self, name: str, value: str, is_inline: bool = False) -> Embed:
        """Append a field; ignored once the embed already holds 25."""
        if len(self.fields) < MAX_FIELDS:
            self.fields.append(
                EmbedField(
                    name=name[:MAX_FIELD_NAME],
                    value=value[:MAX_FIELD_VALUE],
                    is_inline=is_inline,
                )
            )
        return self

    def set_author(self, name: str, url: str = "", icon_url: str = "") -> Embed:
        self.author = EmbedAuthor(name=name[:MAX_AUTHOR_NAME], url=url, icon_url=icon_url)
        return self

    def set_provider(self, name: str, url: str) -> Embed:
        self.provider = EmbedProvider(name=name, url=url)
        return self

    def set_image(self, url: str) -> Embed:
        self.image = EmbedImage(url=url)
        return self

    def set_video(self, url: str) -> Embed:
        self.video = EmbedImage(url=url)
        return self

    def set_thumbnail(self, url: str) -> Embed:
        self.thumbnail = EmbedImage(url=url)
        return self

    def to_json_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key in ("title", "description", "url"):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.color:
            out["color"] = self.color
        if self.timestamp:
            out["timestamp"] = ts_to_iso(self.timestamp)
        for key in ("footer", "image", "thumbnail", "video", "provider", "author"):
            part = getattr(self, key)
            if part is not None:
                out[key] = part.to_json_dict()
        if self.fields:
            out["fields"] = [f.to_json_dict() for f in self.fields]
        return out
