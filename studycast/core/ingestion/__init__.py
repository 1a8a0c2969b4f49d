"""Upload ingestion: batch coordination and the per-file stage pipeline."""

from studycast.core.ingestion.coordinator import IngestionCoordinator
from studycast.core.ingestion.stage_executor import PipelineStageExecutor, document_title

__all__ = ["IngestionCoordinator", "PipelineStageExecutor", "document_title"]
