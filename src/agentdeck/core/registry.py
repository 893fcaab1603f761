"""Tiered discovery registries for agent and skill definitions."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from agentdeck.core.definition import DefinitionMetadata
from agentdeck.utils.config import Config
from agentdeck.utils.def_loader import (
    InvalidDefError,
    ParseFailure,
    is_valid_name,
    parse_definition,
    scan_directories,
)

logger = logging.getLogger(__name__)

Tiers = Sequence[Sequence[Path]]


class DefinitionRegistry:
    """
    In-memory collection of definitions discovered from tiered directories.

    Tiers are processed lowest precedence first; a later tier's definition
    replaces an earlier one with the same name. Each discover() call rebuilds
    the collection and swaps it in only once every tier has been read, so
    readers never observe a half-merged state.
    """

    kind = "definition"

    def __init__(self, tiers: Tiers | None = None) -> None:
        self.tiers: list[list[Path]] = [list(tier) for tier in (tiers or [])]
        self._entries: list[DefinitionMetadata] = []
        self._inflight: asyncio.Task[None] | None = None

    async def discover(self, tiers: Tiers | None = None) -> None:
        """
        Rebuild the registry from the given tiers (defaults to self.tiers).

        Concurrent callers share a single in-flight discovery.
        """
        if self._inflight is None:
            target = [list(t) for t in tiers] if tiers is not None else self.tiers
            self._inflight = asyncio.create_task(self._discover(target))
            self._inflight.add_done_callback(self._clear_inflight)
        else:
            logger.debug(f"Joining in-flight {self.kind} discovery")

        await asyncio.shield(self._inflight)

    def _clear_inflight(self, task: asyncio.Task[None]) -> None:
        if self._inflight is task:
            self._inflight = None

    async def _discover(self, tiers: list[list[Path]]) -> None:
        entries = await asyncio.to_thread(self._collect, tiers)
        self._entries = entries
        logger.info(f"Discovered {len(entries)} {self.kind}(s)")

    def _collect(self, tiers: list[list[Path]]) -> list[DefinitionMetadata]:
        """Scan and parse every tier, then resolve precedence by name."""
        resolved: dict[str, DefinitionMetadata] = {}
        seen_locations: set[Path] = set()

        for tier in tiers:
            tier_entries: list[DefinitionMetadata] = []
            for location in scan_directories(tier):
                if location in seen_locations:
                    continue
                seen_locations.add(location)

                entry = self._load(location)
                if entry is not None:
                    logger.debug(f"Discovered {self.kind}: {entry.name} at {location}")
                    tier_entries.append(entry)

            for entry in tier_entries:
                resolved[entry.name] = entry

        return list(resolved.values())

    def _load(self, location: Path) -> DefinitionMetadata | None:
        """Read and parse one file; None when it has to be skipped."""
        try:
            content = location.read_text(encoding="utf-8")
            entry = parse_definition(content, location, self.kind)
            if not is_valid_name(entry.name):
                raise InvalidDefError(self.kind, str(location), ParseFailure.INVALID_NAME)
        except InvalidDefError as e:
            logger.warning(f"Skipping {e}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {self.kind} file {location}: {e}")
            return None

        return self._post_process(entry)

    def _post_process(self, entry: DefinitionMetadata) -> DefinitionMetadata:
        """Hook for namespace-specific adjustments."""
        return entry

    def get_all(self) -> list[DefinitionMetadata]:
        """All discovered definitions, including disabled ones."""
        return list(self._entries)

    def get_enabled(self) -> list[DefinitionMetadata]:
        """Discovered definitions that are not disabled."""
        return [e for e in self._entries if not e.disabled]

    def get(self, name: str) -> DefinitionMetadata | None:
        """Exact, case-sensitive lookup by name."""
        return next((e for e in self._entries if e.name == name), None)


class AgentRegistry(DefinitionRegistry):
    """Registry of sub-agent definitions."""

    kind = "agent"

    @staticmethod
    def from_config(config: Config) -> "AgentRegistry":
        return AgentRegistry(config.agent_tiers())


class SkillRegistry(DefinitionRegistry):
    """Registry of skill definitions; honours the skills.disabled setting."""

    kind = "skill"

    def __init__(self, tiers: Tiers | None = None, config: Config | None = None) -> None:
        super().__init__(tiers)
        self.config = config

    @staticmethod
    def from_config(config: Config) -> "SkillRegistry":
        return SkillRegistry(config.skill_tiers(), config=config)

    def _post_process(self, entry: DefinitionMetadata) -> DefinitionMetadata:
        if self.config and entry.name in self.config.skills.disabled:
            return entry.model_copy(update={"disabled": True})
        return entry
