"""Field substitution in message content using ``{{...}}`` templates."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Union
from urllib.parse import quote_plus

__all__ = ["Substituter", "TemplateSubstituter", "template_has_field"]

_MARKER = re.compile(r"\{\{(.*?)\}\}", re.S)

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "<": "\\x3c",
    ">": "\\x3e",
    "&": "\\x26",
}


def _html_escape(value: str) -> str:
    return "".join(_HTML_ESCAPES.get(char, char) for char in value)


def _pre_escape(value: str) -> str:
    return _html_escape(value)


def _javascript_escape(value: str) -> str:
    return "".join(_JS_ESCAPES.get(char, char) for char in value)


def _url_query_escape(value: str) -> str:
    return quote_plus(value, safe="-_.*")


_MODIFIERS = {
    "h": _html_escape,
    "html_escape": _html_escape,
    "p": _pre_escape,
    "pre_escape": _pre_escape,
    "j": _javascript_escape,
    "javascript_escape": _javascript_escape,
    "u": _url_query_escape,
    "url_query_escape": _url_query_escape,
    "none": lambda value: value,
}


class _TemplateSyntaxError(ValueError):
    """Raised when a template's sections do not balance."""


@dataclass
class _Variable:
    name: str
    modifiers: tuple[str, ...]


@dataclass
class _Section:
    name: str
    children: list = field(default_factory=list)


_Node = Union[str, _Variable, _Section]


def _parse(text: str) -> list[_Node]:
    root: list[_Node] = []
    stack: list[_Section] = []
    current = root
    position = 0
    for match in _MARKER.finditer(text):
        if match.start() > position:
            current.append(text[position:match.start()])
        position = match.end()
        marker = match.group(1).strip()
        if not marker:
            raise _TemplateSyntaxError("empty marker")
        kind, rest = marker[0], marker[1:].strip()
        if kind in "!%>=":
            # Comments, pragmas, includes and delimiter changes produce nothing.
            continue
        if kind == "#":
            section = _Section(rest)
            current.append(section)
            stack.append(section)
            current = section.children
        elif kind == "/":
            if not stack or stack[-1].name != rest:
                raise _TemplateSyntaxError(f"unexpected end of section {rest!r}")
            stack.pop()
            current = stack[-1].children if stack else root
        else:
            name, *modifiers = (part.strip() for part in marker.split(":"))
            current.append(_Variable(name, tuple(modifiers)))
    if stack:
        raise _TemplateSyntaxError(f"unterminated section {stack[-1].name!r}")
    if position < len(text):
        current.append(text[position:])
    return root


def _apply_modifiers(value: str, modifiers: tuple[str, ...]) -> str:
    for modifier in modifiers:
        name = modifier.split("=", 1)[0]
        transform = _MODIFIERS.get(name)
        if transform is not None:
            value = transform(value)
    return value


def template_has_field(content_template: str, field_name: str) -> bool:
    """Quick check for whether ``field_name`` appears as a template field."""
    return "{{" + field_name in content_template


class Substituter(ABC):
    """Substitutes fields in content with their actual values."""

    def __init__(
        self, dictionary_id: str, content_template: str, escape_entities: bool
    ) -> None:
        self.dictionary_id = dictionary_id
        self.content_template = content_template
        self.escape_entities = escape_entities

    @abstractmethod
    def has_fields(self) -> bool:
        """Return whether there are fields to substitute in the content."""

    @abstractmethod
    def has_field(self, field_name: str) -> bool:
        """Return whether the given field name is to be substituted."""

    @abstractmethod
    def substitute(self, field_values: Mapping[str, str]) -> str:
        """Return the content with fields replaced by their values."""


class TemplateSubstituter(Substituter):
    """Expands ``{{Field}}`` variables and ``{{#Field_section}}`` sections.

    Values given to :meth:`substitute` are kept, so later calls see them too.
    Every field given also shows the section named ``<field>_section``.
    """

    def __init__(
        self, dictionary_id: str, content_template: str, escape_entities: bool
    ) -> None:
        super().__init__(dictionary_id, content_template, escape_entities)
        self._values: dict[str, str] = {}
        self._shown_sections: set[str] = set()

    def has_fields(self) -> bool:
        return "{{" in self.content_template and "}}" in self.content_template

    def has_field(self, field_name: str) -> bool:
        return template_has_field(self.content_template, field_name)

    def substitute(self, field_values: Mapping[str, str]) -> str:
        for name, value in field_values.items():
            self._values[name] = value
            self._shown_sections.add(name + "_section")
        try:
            nodes = _parse(self.content_template)
        except _TemplateSyntaxError:
            return self.content_template
        return self._render(nodes)

    def _render(self, nodes: list[_Node]) -> str:
        parts: list[str] = []
        for node in nodes:
            if isinstance(node, str):
                parts.append(node)
            elif isinstance(node, _Variable):
                parts.append(
                    _apply_modifiers(self._values.get(node.name, ""), node.modifiers)
                )
            elif node.name in self._shown_sections:
                parts.append(self._render(node.children))
        return "".join(parts)