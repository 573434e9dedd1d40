"""Core business logic for partitioning a recording into segment windows."""

import math

from audio_splitter.exceptions import InvalidConfigurationError, InvalidDurationError

from .models import SegmentPlan, SegmentWindow

# Remainders shorter than this are float noise from the division, not audio.
_REMAINDER_EPSILON = 1e-6


class SegmentPlanner:
    """Computes fixed-length windows that cover a recording end to end."""

    def plan(self, total_duration: float, segment_length: float) -> SegmentPlan:
        """
        Partitions ``total_duration`` seconds into windows of ``segment_length``.

        Every window except the last is exactly ``segment_length`` long. The
        last window ends at ``total_duration``, so the windows are contiguous,
        non-overlapping and their lengths add up to the full duration.

        Args:
            total_duration: Source duration in seconds.
            segment_length: Nominal window length in seconds.

        Returns:
            SegmentPlan with dense indices starting at 0.

        Raises:
            InvalidDurationError: If ``total_duration`` is not positive.
            InvalidConfigurationError: If ``segment_length`` is not a positive finite number.
        """
        if not math.isfinite(segment_length) or segment_length <= 0:
            raise InvalidConfigurationError(
                "segment_duration_seconds",
                f"must be a positive finite number, got {segment_length}",
            )
        if total_duration <= 0 or not math.isfinite(total_duration):
            raise InvalidDurationError(total_duration)

        count = math.ceil(total_duration / segment_length)
        while count > 1 and total_duration - (count - 1) * segment_length <= _REMAINDER_EPSILON:
            count -= 1

        windows = []
        for index in range(count):
            start = index * segment_length
            if index == count - 1:
                length = total_duration - start
            else:
                length = segment_length
            windows.append(
                SegmentWindow(index=index, start_seconds=start, length_seconds=length)
            )

        return SegmentPlan(
            total_duration=total_duration,
            segment_length=segment_length,
            windows=windows,
        )
