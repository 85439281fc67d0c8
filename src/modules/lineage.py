# -*- coding: utf-8 -*-
"""Row-level lineage for keyword batch runs.

Module: lineage
Purpose: Record every catalog product handled by a batch run

This module provides the DataLineage class for tracking:
- SKU and source row index
- Operation performed
- Status ("success" or "failed: <reason>")
- Timestamp for audit trail
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_FAILED_PREFIX = "failed"

LINEAGE_FIELDS = ["sku", "source_row", "operation", "status", "timestamp"]


class DataLineage:
    """Track per-product outcomes of a batch run.

    Every product processed must be tracked with:
    - SKU and source row number
    - Operation name
    - Status (success or failure reason)
    """

    def __init__(self, output_dir: Path):
        """Initialize lineage tracker.

        Args:
            output_dir: Directory where lineage CSV will be saved
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.entries: List[Dict] = []
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def track(
        self,
        sku: str,
        source_row: int,
        operation: str,
        status: str = STATUS_SUCCESS,
    ) -> None:
        """Track a single product.

        Args:
            sku: Product SKU
            source_row: Row index in the catalog (0-based)
            operation: Name of operation (e.g., "generate_keywords")
            status: "success" or "failed: <reason>"
        """
        self.entries.append(
            {
                "sku": sku,
                "source_row": source_row,
                "operation": operation,
                "status": status,
                "timestamp": datetime.now().isoformat(),
            }
        )

    def track_failure(
        self, sku: str, source_row: int, operation: str, error: Exception
    ) -> None:
        """Track a failed product with the exception as reason."""
        self.track(
            sku,
            source_row,
            operation,
            f"{STATUS_FAILED_PREFIX}: {type(error).__name__}: {error}",
        )

    def save(self) -> Optional[Path]:
        """Save lineage entries to CSV file.

        Returns:
            Path to saved lineage CSV file, None when nothing was tracked
        """
        if not self.entries:
            logger.warning("No lineage entries to save")
            return None

        lineage_filepath = self.output_dir / f"lineage_{self.timestamp}.csv"

        try:
            with open(lineage_filepath, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=LINEAGE_FIELDS)
                writer.writeheader()
                writer.writerows(self.entries)
        except OSError as e:
            logger.error(f"Failed to save lineage: {e}")
            raise

        logger.info(f"Lineage saved to: {lineage_filepath}")
        return lineage_filepath

    def summary(self) -> Dict:
        """Get summary statistics of lineage.

        Returns:
            Dict with keys: total, processed, failed, success_rate
        """
        total = len(self.entries)
        processed = sum(1 for entry in self.entries if entry["status"] == STATUS_SUCCESS)
        failed = total - processed

        return {
            "total": total,
            "processed": processed,
            "failed": failed,
            "success_rate": (processed / total * 100) if total > 0 else 0,
        }
