"""Concurrent processing of document batches."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from docintake.classification.document_types import DocumentType
from docintake.utils.logger import get_logger

from .document_pipeline import DocumentPipeline, ExtractionOutcome

logger = get_logger(__name__)


@dataclass
class BatchItem:
    """Per-document result of a batch run; exactly one of outcome/error is set."""

    file_name: str
    outcome: ExtractionOutcome | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is not None


def process_batch(
    pipeline: DocumentPipeline,
    documents: Sequence[tuple[str, bytes]],
    document_type: DocumentType | None = None,
    max_workers: int = 4,
) -> list[BatchItem]:
    """Process documents concurrently, one task per document.

    Args:
        pipeline: Pipeline shared by all workers.
        documents: ``(file_name, file_bytes)`` pairs.
        document_type: Optional type applied to every document.
        max_workers: Thread pool size.

    Returns:
        One ``BatchItem`` per document, in input order.
    """
    if not documents:
        return []

    results: list[BatchItem | None] = [None] * len(documents)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        future_to_index = {
            executor.submit(
                pipeline.process_document, file_bytes, file_name, None, document_type
            ): i
            for i, (file_name, file_bytes) in enumerate(documents)
        }

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            file_name = documents[index][0]
            try:
                results[index] = BatchItem(file_name=file_name, outcome=future.result())
            except Exception as exc:
                logger.error("Batch processing failed for %s: %s", file_name, exc)
                results[index] = BatchItem(file_name=file_name, error=str(exc))

    succeeded = sum(1 for item in results if item is not None and item.succeeded)
    logger.info("Batch complete: %d/%d documents processed", succeeded, len(documents))
    return [item for item in results if item is not None]
