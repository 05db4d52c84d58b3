from __future__ import annotations

"""
Repository Config Serializer.

Renders the three-level configuration mapping (section -> subsection ->
settings) into the INI-like text stored in a repository's 'config' file.
An empty subsection name stands for the bare section.

Example:
    >>> serialize({"core": {"": {"bare": False, "repositoryformatversion": 0}}})
    '[core]\\n  bare = false\\n  repositoryformatversion = 0\\n'
"""

import json
import math
from typing import Any, List, Mapping

from cs01.domain.errors import ValidationError

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def serialize(config_object: Any) -> str:
    """
    Convert a nested configuration mapping into INI-like text.

    Blocks follow the mapping's key order, sections outer and subsections
    inner. Each block is a header line followed by two-space indented
    'key = value' lines and ends with a single newline. Subsection names are
    quoted but not escaped.

    Args:
        config_object: Mapping of section -> subsection -> settings.

    Returns:
        str: The serialized configuration.

    Raises:
        ValidationError: If the object, a section or a subsection is not a
            mapping, or the object is empty. Nothing is emitted in that case.
    """
    if not isinstance(config_object, Mapping) or not config_object:
        raise ValidationError("Invalid config object: must be a non-empty mapping.")

    blocks: List[str] = []
    for section, subsections in config_object.items():
        if not isinstance(subsections, Mapping):
            raise ValidationError(
                f"Invalid section '{section}': must contain subsection mappings."
            )

        for subsection, settings in subsections.items():
            quoted = "" if subsection == "" else f' "{subsection}"'
            if not isinstance(settings, Mapping):
                raise ValidationError(
                    f"Invalid settings for [{section}{quoted}]: must be a mapping."
                )

            lines = [f"[{section}{quoted}]"]
            lines.extend(f"  {key} = {format_value(value)}" for key, value in settings.items())
            blocks.append("\n".join(lines) + "\n")

    return "".join(blocks)


def format_value(value: Any) -> str:
    """
    Render a single setting value.

    Booleans become 'true'/'false' and numbers use base 10, whole floats
    included (1e16 renders as 10000000000000000). Strings are kept verbatim.
    None and containers are encoded as compact JSON.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)
