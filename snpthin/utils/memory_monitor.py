"""Memory usage monitoring and warning system."""

import logging

import psutil

__all__ = ["MemoryMonitor"]


class MemoryMonitor:
    """Utility class for monitoring memory usage and providing warnings.

    The whole record set is held in memory, so large inputs are flagged
    before sampling starts.
    """

    # Thresholds as percentages of total system memory
    WARNING_THRESHOLD_PERCENT = 50.0
    CRITICAL_THRESHOLD_PERCENT = 90.0

    # Rough per-record cost of an SNP object plus its strings
    BYTES_PER_RECORD = 200
    BYTES_PER_PAYLOAD_FIELD = 60

    def __init__(self, logger: logging.Logger):
        """Initialize memory monitor with logger and dynamic thresholds.

        Args:
            logger: Logger instance for output
        """
        self.logger = logger
        self.process = psutil.Process()

        total_memory_mb = psutil.virtual_memory().total / 1024 / 1024
        self.warning_threshold_mb = total_memory_mb * (
            self.WARNING_THRESHOLD_PERCENT / 100
        )
        self.critical_threshold_mb = total_memory_mb * (
            self.CRITICAL_THRESHOLD_PERCENT / 100
        )

        self.logger.debug(
            f"Memory thresholds calculated: Warning={self.warning_threshold_mb:.1f}MB "
            f"({self.WARNING_THRESHOLD_PERCENT}%), Critical={self.critical_threshold_mb:.1f}MB "
            f"({self.CRITICAL_THRESHOLD_PERCENT}%) of {total_memory_mb:.1f}MB total"
        )

    def get_memory_usage_mb(self) -> float:
        """Get current resident memory of this process in MB."""
        rss: int = self.process.memory_info().rss
        return float(rss / 1024 / 1024)

    def get_available_memory_mb(self) -> float:
        """Get available system memory in MB."""
        available: int = psutil.virtual_memory().available
        return float(available / 1024 / 1024)

    def check_memory_and_warn(self, operation: str = "operation") -> None:
        """Check current memory usage and warn if approaching limits.

        Args:
            operation: Name of operation being performed (for logging context)

        Example:
            >>> monitor = MemoryMonitor(logger)
            >>> monitor.check_memory_and_warn("decoding")
            >>> # Will log warning if memory usage exceeds thresholds
        """
        current_mb = self.get_memory_usage_mb()
        available_mb = self.get_available_memory_mb()

        if current_mb > self.critical_threshold_mb:
            self.logger.warning(
                f"CRITICAL: High memory usage during {operation}: {current_mb:.1f}MB "
                f"(>{self.critical_threshold_mb:.1f}MB threshold). "
                f"Available: {available_mb:.1f}MB. Consider splitting the input "
                "by scaffold or increasing system memory."
            )
        elif current_mb > self.warning_threshold_mb:
            self.logger.warning(
                f"WARNING: Elevated memory usage during {operation}: {current_mb:.1f}MB "
                f"(>{self.warning_threshold_mb:.1f}MB threshold). "
                f"Available: {available_mb:.1f}MB. Monitor for potential issues."
            )
        else:
            self.logger.debug(f"Memory usage during {operation}: {current_mb:.1f}MB")

    def estimate_records_memory_mb(self, num_records: int, payload_fields: int) -> float:
        """Estimate memory held by decoded records in MB.

        Args:
            num_records: Number of decoded records
            payload_fields: Probability fields per record (0 for simple input)

        Example:
            >>> monitor.estimate_records_memory_mb(1_000_000, 0)
            190.73486328125
        """
        per_record = self.BYTES_PER_RECORD + payload_fields * self.BYTES_PER_PAYLOAD_FIELD
        return num_records * per_record / 1024 / 1024

    def warn_for_large_dataset(self, num_records: int, payload_fields: int) -> None:
        """Warn about potential memory issues with large inputs.

        Args:
            num_records: Number of decoded records
            payload_fields: Probability fields per record (0 for simple input)
        """
        estimated_mb = self.estimate_records_memory_mb(num_records, payload_fields)
        available_mb = self.get_available_memory_mb()

        if estimated_mb > available_mb * 0.8:
            self.logger.warning(
                f"MEMORY WARNING: Dataset ({num_records} SNPs × {payload_fields} fields) "
                f"may require ~{estimated_mb:.1f}MB memory, but only {available_mb:.1f}MB available. "
                "Consider reducing dataset size or using a machine with more memory."
            )
        elif estimated_mb > self.warning_threshold_mb:
            self.logger.warning(
                f"Large dataset detected ({num_records} SNPs × {payload_fields} fields). "
                f"Estimated memory usage ~{estimated_mb:.1f}MB exceeds warning threshold "
                f"({self.warning_threshold_mb:.1f}MB). Monitor memory usage carefully."
            )
        elif estimated_mb > self.warning_threshold_mb * 0.5:
            self.logger.info(
                f"Large dataset detected ({num_records} SNPs × {payload_fields} fields). "
                f"Estimated memory usage: ~{estimated_mb:.1f}MB"
            )
