"""Definition metadata shared by agents and skills."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

INHERIT_MODEL = "inherit"


class DefinitionMetadata(BaseModel):
    """A parsed agent or skill definition file."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    location: Path
    body: str = ""
    tools: list[str] | None = None
    model: str | None = None
    disabled: bool = False
    created_by: str | None = None

    @property
    def inherits_model(self) -> bool:
        """True when the caller's active model should be used."""
        return self.model is None or self.model == INHERIT_MODEL
