"""Configuration for the implementation finder."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from goimpl_analyser.errors import FinderConfigError

_DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class FinderConfig(BaseModel):
    """Configuration for ImplementationFinder with Pydantic validation.

    Features:
        - Immutable (frozen) so a scan cannot alter its own settings
        - Strict validation (no extra fields allowed)
        - from_properties() factory method for dictionary-based creation
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
    )

    max_file_size: int = Field(
        default=_DEFAULT_MAX_FILE_SIZE,
        description="Skip source files larger than this size in bytes",
        gt=0,
    )
    max_workers: int = Field(
        default=1,
        description="Number of directories analysed concurrently",
        ge=1,
    )
    timeout: float | None = Field(
        default=None,
        description="Abort the walk after this many seconds (None: no limit)",
        gt=0,
    )
    exclude_dirs: tuple[str, ...] = Field(
        default=(),
        description="Directory names pruned from the walk (the search root is never pruned)",
    )
    flatten_embedded: bool = Field(
        default=False,
        description="Expand embedded interfaces declared in the interface file",
    )

    @field_validator("exclude_dirs", mode="before")
    @classmethod
    def normalise_exclude_dirs(cls, v: Any) -> tuple[str, ...]:  # noqa: ANN401
        """Strip names and drop empty entries."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        names: list[str] = []
        for item in v:
            if not isinstance(item, str):
                raise ValueError("exclude_dirs entries must be strings")
            name = item.strip().strip("/")
            if name and name not in names:
                names.append(name)
        return tuple(names)

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary.

        Args:
            properties: Raw properties (e.g. collected from CLI options)

        Returns:
            Validated configuration object

        Raises:
            FinderConfigError: If validation fails

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            raise FinderConfigError(f"Invalid finder configuration: {e}") from e
        except ValueError as e:
            raise FinderConfigError(f"Invalid finder configuration: {e}") from e
