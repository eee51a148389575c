"""
Structured logging for index maintenance, embedding calls and suggestions.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.config import DEBUG


class StructuredLogger:
    """Structured logger for vault indexing and semantic search operations."""

    def __init__(self, name: str = "second_brain", debug: bool = False):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if debug else logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_index_operation(self, operation: str, identifier: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log an index operation (rebuild entry, upsert, remove)."""
        log_details = {"identifier": identifier}
        if details:
            log_details.update(details)

        self.log_operation(f"index.{operation}", status, log_details)

    def log_index_rebuild(self, document_count: int, empty_count: int):
        """Log completion of a full index rebuild."""
        log_details = {
            "documents": document_count,
            "without_embedding": empty_count
        }
        self.log_operation("index.rebuild", "complete", log_details)

    def log_embedding_failure(self, reason: str, details: Dict[str, Any] = None, level: int = logging.ERROR):
        """Log an embedding request that degraded to an empty vector."""
        log_details = {"reason": reason}
        if details:
            # Keep error text short, responses can be large
            for k, v in details.items():
                if isinstance(v, str) and len(v) > 100:
                    log_details[k] = v[:97] + "..."
                else:
                    log_details[k] = v

        self.log_operation("embedding.request", "failed", log_details, level=level)

    def log_suggestions(self, query_text: str, results: List[Any], top_n: Optional[int] = None):
        """Log suggestions computed for a piece of editor content."""
        log_details = {
            "query": query_text[:50] + "..." if len(query_text) > 50 else query_text,
            "results": [(r.identifier, round(r.score, 4)) for r in results]
        }
        if top_n is not None:
            log_details["top_n"] = top_n

        self.log_operation("search.suggestions", "success", log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger(debug=DEBUG)
