"""Pydantic base model shared by project, wizard, export and KDP models."""

from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """
    Base model for everything that is edited in place and saved to a project file.

    Assignments are validated so an edited chapter or setting cannot hold a
    value that would fail to load again. Enums stay enum members in memory and
    are written as their values when the model is dumped to JSON.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
        use_enum_values=False,
        strict=False,
        validate_default=True,
    )
