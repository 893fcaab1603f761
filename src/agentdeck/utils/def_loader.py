"""Shared utilities for loading definition files (agents, skills)."""

import logging
import re
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from agentdeck.core.definition import DefinitionMetadata

logger = logging.getLogger(__name__)

DEFINITION_GLOB = "*.md"

# Front matter between two `---` lines, followed by the body.
_FRONTMATTER_RE = re.compile(r"^---\r?\n(.*?)\r?\n---\r?\n(.*)", re.DOTALL)

NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class ParseFailure(str, Enum):
    """Why a definition document was rejected."""

    MALFORMED_DOCUMENT = "malformed_document"
    MALFORMED_METADATA = "malformed_metadata"
    MISSING_NAME = "missing_name"
    INVALID_NAME = "invalid_name"


class DefNotFoundError(Exception):
    """Definition doesn't exist."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} not found: {def_id}")
        self.kind = kind
        self.def_id = def_id


class InvalidDefError(Exception):
    """Definition file is malformed."""

    def __init__(self, kind: str, def_id: str, reason: ParseFailure | str):
        detail = reason.value if isinstance(reason, ParseFailure) else reason
        super().__init__(f"Invalid {kind} '{def_id}': {detail}")
        self.kind = kind
        self.def_id = def_id
        self.reason = reason


def is_valid_name(name: str) -> bool:
    """Check that a definition name only uses letters, digits, '_' and '-'."""
    return bool(NAME_PATTERN.match(name))


def substitute_template(body: str, variables: dict[str, str]) -> str:
    """
    Replace {{variable}} placeholders in template body.

    Args:
        body: Template string with {{variable}} placeholders
        variables: Dict of variable names to values

    Returns:
        Body with all matching placeholders replaced
    """
    result = body
    # Longer keys first so overlapping names don't clobber each other
    for key in sorted(variables.keys(), key=len, reverse=True):
        result = result.replace(f"{{{{{key}}}}}", variables[key])
    return result


def split_frontmatter(content: str) -> tuple[str, str] | None:
    """Split a document into (frontmatter_text, body), or None if undelimited."""
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        return None
    return match.group(1), match.group(2)


def _coerce_optional_fields(frontmatter: dict[str, Any]) -> dict[str, Any]:
    """Keep only optional fields that have exactly the expected shape."""
    fields: dict[str, Any] = {}

    description = frontmatter.get("description")
    if isinstance(description, str):
        fields["description"] = description

    tools = frontmatter.get("tools")
    if isinstance(tools, list) and all(isinstance(t, str) for t in tools):
        fields["tools"] = tools

    model = frontmatter.get("model")
    if isinstance(model, str):
        fields["model"] = model

    # bool check must be exact; yaml gives real bools for true/false
    disabled = frontmatter.get("disabled")
    if isinstance(disabled, bool):
        fields["disabled"] = disabled

    created_by = frontmatter.get("created_by")
    if isinstance(created_by, str):
        fields["created_by"] = created_by

    return fields


def parse_definition(
    content: str, location: Path, kind: str = "definition"
) -> DefinitionMetadata:
    """
    Parse YAML frontmatter + markdown body into DefinitionMetadata.

    Wrong-typed optional fields are dropped rather than failing the document.

    Args:
        content: Raw file content
        location: Absolute path of the file the content came from
        kind: Namespace used in error messages ("agent", "skill")

    Returns:
        Parsed DefinitionMetadata

    Raises:
        InvalidDefError: With a ParseFailure reason
    """
    parts = split_frontmatter(content)
    if parts is None:
        raise InvalidDefError(kind, str(location), ParseFailure.MALFORMED_DOCUMENT)
    frontmatter_text, body = parts

    try:
        frontmatter = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        logger.debug(f"YAML error in {location}: {e}")
        raise InvalidDefError(kind, str(location), ParseFailure.MALFORMED_METADATA)

    if not isinstance(frontmatter, dict):
        raise InvalidDefError(kind, str(location), ParseFailure.MALFORMED_METADATA)

    name = frontmatter.get("name")
    if not isinstance(name, str):
        raise InvalidDefError(kind, str(location), ParseFailure.MISSING_NAME)

    return DefinitionMetadata(
        name=name,
        location=location,
        body=body.strip(),
        **_coerce_optional_fields(frontmatter),
    )


def scan_directories(directories: Iterable[Path]) -> list[Path]:
    """
    List definition files directly inside each directory.

    Missing directories are skipped; an unreadable directory contributes
    nothing and does not stop the scan.

    Args:
        directories: Directories to scan, in order

    Returns:
        Absolute paths of matching files, directory order preserved
    """
    found: list[Path] = []
    for directory in directories:
        try:
            search_path = Path(directory).expanduser().resolve()
            logger.debug(f"Scanning for definitions in: {search_path}")

            if not search_path.is_dir():
                logger.debug(f"Search path is not a directory: {search_path}")
                continue

            files = sorted(
                p.resolve() for p in search_path.glob(DEFINITION_GLOB) if p.is_file()
            )
            logger.debug(f"Found {len(files)} definition files in {search_path}")
            found.extend(files)
        except OSError as e:
            logger.warning(f"Error scanning {directory}: {e}")
            continue

    return found


def write_definition(
    name: str,
    frontmatter: dict[str, Any],
    body: str,
    directory: Path,
) -> Path:
    """
    Write a definition file with YAML frontmatter and markdown body.

    Args:
        name: Definition name (file stem)
        frontmatter: Dict of YAML frontmatter fields
        body: Markdown body content
        directory: Tier directory (e.g., ~/.agentdeck/agents)

    Returns:
        Path to the written file
    """
    directory.mkdir(parents=True, exist_ok=True)

    yaml_content = yaml.safe_dump(
        frontmatter, default_flow_style=False, sort_keys=False
    )
    content = f"---\n{yaml_content}---\n\n{body.strip()}\n"

    def_file = directory / f"{name}.md"
    def_file.write_text(content)

    return def_file
