"""Domain errors and failure typing."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for backend failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class StageError(PipelineError):
    """Raised for stage failures that should halt the current operation."""

    error_code = "STAGE_ERROR"


class ExternalNodeNotFound(StageError):
    """Raised when an OSM node is absent or could not be fetched or parsed."""

    error_code = "OSM_NODE_NOT_FOUND"

    def __init__(self, node_id: int) -> None:
        super().__init__(f"The OpenStreetMap node with ID {node_id} does not exist.")
        self.node_id = node_id


class MissingRequiredFields(StageError):
    """Raised when an OSM node lacks the fields required to create a POS."""

    error_code = "OSM_NODE_MISSING_FIELDS"

    def __init__(self, node_id: int, fields: list[str]) -> None:
        super().__init__(
            f"The OpenStreetMap node with ID {node_id} is missing required fields: {', '.join(fields)}"
        )
        self.node_id = node_id
        self.fields = list(fields)


class DuplicateName(StageError):
    error_code = "DUPLICATE_POS_NAME"

    def __init__(self, name: str) -> None:
        super().__init__(f"POS with name '{name}' already exists.")
        self.name = name


class RecordNotFound(StageError):
    error_code = "POS_NOT_FOUND"

    def __init__(self, record_id: int) -> None:
        super().__init__(f"POS with ID {record_id} does not exist.")
        self.record_id = record_id
