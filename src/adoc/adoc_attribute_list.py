"""
Parser for AsciiDoc block attribute lists such as `[source,ruby]` or `[cols="1,2",options="header"]`.
"""

import re
from typing import Dict, List


class AdocAttributeList:
    """Parses the body of a block attribute line into an attribute dictionary."""

    _NAMED_PATTERN = re.compile(r'^(\w[\w-]*)\s*=\s*(.*)$', re.DOTALL)
    _SHORTHAND_PATTERN = re.compile(r'([#.%])([^#.%]*)')

    @staticmethod
    def split_entries(text: str) -> List[str]:
        """
        Split an attribute list body on commas that are not inside quotes.

        Args:
            text: The text between the square brackets

        Returns:
            The raw entries, stripped of surrounding whitespace
        """
        entries: List[str] = []
        current: List[str] = []
        quote = ""

        for ch in text:
            if quote:
                current.append(ch)
                if ch == quote:
                    quote = ""

                continue

            if ch in ('"', "'"):
                quote = ch
                current.append(ch)
                continue

            if ch == ',':
                entries.append("".join(current).strip())
                current = []
                continue

            current.append(ch)

        tail = "".join(current).strip()
        if tail or entries:
            entries.append(tail)

        return entries

    @staticmethod
    def unquote(value: str) -> str:
        """Remove one level of matching single or double quotes."""
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            return value[1:-1]

        return value

    @classmethod
    def parse(cls, text: str) -> Dict[str, str]:
        """
        Parse an attribute list body.

        Positional entries are stored under their 1-based index ("1", "2", ...).  The first positional
        entry also provides the block style, and may carry `#id`, `.role` and `%option` shorthands.

        Args:
            text: The text between the square brackets

        Returns:
            Dictionary of attribute names to values, in source order
        """
        attributes: Dict[str, str] = {}
        position = 0

        for entry in cls.split_entries(text):
            match = cls._NAMED_PATTERN.match(entry)
            if match and entry[0] not in ('"', "'"):
                name = match.group(1)
                value = cls.unquote(match.group(2))
                if name == "options" or name == "opts":
                    cls._add_options(attributes, value.split(","))
                    continue

                attributes[name] = value
                continue

            position += 1
            value = cls.unquote(entry)
            if position == 1:
                cls._parse_first_positional(attributes, value)
                continue

            attributes[str(position)] = value

        return attributes

    @classmethod
    def _parse_first_positional(cls, attributes: Dict[str, str], value: str) -> None:
        """
        Parse the first positional attribute, including its shorthand forms.

        Args:
            attributes: The attribute dictionary being built
            value: The unquoted first positional entry
        """
        attributes["1"] = value
        if not value:
            return

        split_at = len(value)
        for marker in "#.%":
            index = value.find(marker)
            if index != -1:
                split_at = min(split_at, index)

        style = value[:split_at]
        if style:
            attributes["style"] = style

        roles: List[str] = []
        options: List[str] = []
        for match in cls._SHORTHAND_PATTERN.finditer(value[split_at:]):
            kind, name = match.group(1), match.group(2)
            if not name:
                continue

            if kind == "#":
                attributes["id"] = name

            elif kind == ".":
                roles.append(name)

            else:
                options.append(name)

        if roles:
            attributes["role"] = " ".join(roles)

        if options:
            cls._add_options(attributes, options)

    @staticmethod
    def _add_options(attributes: Dict[str, str], options: List[str]) -> None:
        """
        Record block options both as an `options` list and as individual `<name>-option` flags.

        Args:
            attributes: The attribute dictionary being built
            options: Option names to add
        """
        existing = [opt for opt in attributes.get("options", "").split(",") if opt]
        for option in options:
            option = option.strip()
            if not option:
                continue

            if option not in existing:
                existing.append(option)

            attributes[f"{option}-option"] = ""

        attributes["options"] = ",".join(existing)
