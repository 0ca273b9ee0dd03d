from __future__ import annotations

from typing import Any

import yaml


class FrontmatterError(ValueError):
    pass


class _FrontmatterLoader(yaml.SafeLoader):
    pass


# Leave timestamps as plain strings; PostFrontmatter parses dates and can name
# the field when one is impossible (2024-13-01).
_FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_frontmatter(raw_text: str) -> tuple[dict[str, Any], str]:
    """
    Split a Markdown/MDX document into frontmatter and body.

    Args:
        raw_text: full file contents.

    Returns:
        (frontmatter, body). A document without a leading '---' fence, or
        without a closing one, has empty frontmatter and is returned whole.

    Raises:
        FrontmatterError: the fenced block is not valid YAML or is not a mapping.
    """
    # Normalize newlines and strip BOM if present
    s = raw_text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")

    lines = s.split("\n")
    if not lines or lines[0].strip() != "---":
        return {}, s

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, s

    frontmatter_text = "\n".join(lines[1:end_idx]).strip()
    body = "\n".join(lines[end_idx + 1:]).lstrip("\n")

    if not frontmatter_text:
        return {}, body

    try:
        loaded = yaml.load(frontmatter_text, Loader=_FrontmatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise FrontmatterError(f"frontmatter is not valid YAML: {e}") from e

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        raise FrontmatterError(f"frontmatter must be a mapping, got {type(loaded).__name__}")

    return loaded, body
