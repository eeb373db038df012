"""Configuration models for mdpaste."""

from pydantic import BaseModel, Field, field_validator
from pathlib import Path
from typing import Optional
import yaml


class GraphConfig(BaseModel):
    """Configuration for the Logseq graph notes are written to."""

    graph_path: Optional[str] = Field(
        default=None,
        description="Path to Logseq graph directory"
    )

    @field_validator('graph_path')
    @classmethod
    def validate_graph_path(cls, v: Optional[str]) -> Optional[str]:
        """Validate graph path exists and is a directory."""
        if v is None:
            return v
        path = Path(v).expanduser()
        if not path.exists():
            raise ValueError(
                f"Graph path does not exist: {path}\n"
                f"Please create the directory or update config.yaml"
            )
        if not path.is_dir():
            raise ValueError(
                f"Graph path is not a directory: {path}\n"
                f"Please provide a valid directory path"
            )
        return str(path)

    model_config = {"frozen": True}


class ImportConfig(BaseModel):
    """Settings for converting markdown into notes."""

    default_title: str = Field(
        default="New Note",
        min_length=1,
        description="Title for content that precedes the first '# Heading'"
    )

    fallback_title: str = Field(
        default="Imported Note",
        min_length=1,
        description="Title used when the input has no '# Heading' at all"
    )

    code_language: str = Field(
        default="plaintext",
        min_length=1,
        description="Highlight language for fenced code blocks without a tag"
    )

    indent_width: int = Field(
        default=2,
        ge=1,
        le=8,
        description="Columns of leading whitespace per nesting level"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for mdpaste."""

    graph: GraphConfig = Field(default_factory=GraphConfig, description="Logseq graph settings")
    import_: ImportConfig = Field(
        default_factory=ImportConfig,
        alias="import",
        description="Markdown conversion settings"
    )

    @classmethod
    def load(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file.

        A missing file is not an error: every setting has a default and the
        graph path can be given on the command line instead.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated Config instance

        Raises:
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            return cls()

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top of {path}")

        return cls.model_validate(data)

    def with_graph_path(self, graph_path: Path) -> "Config":
        """Return a copy with the graph path replaced (e.g. from --graph)."""
        return self.model_copy(update={"graph": GraphConfig(graph_path=str(graph_path))})

    model_config = {"frozen": True, "populate_by_name": True}
