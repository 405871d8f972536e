"""
YAML encoding and decoding of Config values.

serialize() produces canonical text: sections and fields always appear in the
same order, preserved unknown keys follow sorted by name, sets are written
with their members sorted, and the output always ends with a newline. Equal
configs therefore serialize to identical text in every process, which is what
makes save/load round trips stable.
"""

from typing import Any, Dict

import yaml

from bender_config.config.settings import Config
from bender_config.errors import ParseError


class CanonicalDumper(yaml.SafeDumper):
    """SafeDumper that writes sets in sorted order instead of hash order."""

    def represent_set(self, data):
        members = {member: None for member in sorted(data, key=str)}
        return self.represent_mapping('tag:yaml.org,2002:set', members)


CanonicalDumper.add_representer(set, CanonicalDumper.represent_set)


def dump(data: Any) -> str:
    """Encode plain data as canonical YAML text."""
    return yaml.dump(
        data,
        Dumper=CanonicalDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=4096,
    )


def serialize(config: Config) -> str:
    """Encode a Config as YAML text."""
    return dump(config.to_dict())


def parse(text: str) -> Dict[str, Any]:
    """Parse YAML text into a plain mapping without validating fields.

    An empty document yields an empty mapping.

    Raises:
        ParseError: If the text is not well-formed YAML or not a mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark
        reason = e.problem or str(e)
        if mark is None:
            raise ParseError(reason) from e
        raise ParseError(reason, line=mark.line + 1, column=mark.column + 1) from e
    except yaml.YAMLError as e:
        raise ParseError(str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(f"top level must be a mapping, got {type(data).__name__}")
    return data


def deserialize(text: str) -> Config:
    """Decode YAML text into a Config, filling missing fields with defaults.

    Raises:
        ParseError: If the text is malformed
        ValidationError: If a recognized field is out of its domain
    """
    return Config.from_dict(parse(text))
