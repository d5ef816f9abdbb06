"""Runs the detector on behalf of the CLI, with an optional deadline."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path
from typing import Optional

from fractal_explore.detector import ProjectDetector
from fractal_explore.errors import FractalExploreError
from fractal_explore.models import ProjectClassification

logger = logging.getLogger("fractal_explore.detection")


def run_detection(
    root: Path,
    timeout: Optional[float] = None,
    detector: Optional[ProjectDetector] = None,
) -> ProjectClassification:
    """Detect the project at ``root``.

    Args:
        root: Project root directory.
        timeout: Seconds to wait before giving up. None waits indefinitely.
        detector: Detector instance to use (a default one if omitted).

    Raises:
        FractalExploreError: Detection did not finish within ``timeout``.
            The classified detection errors propagate unchanged.
    """
    detector = detector or ProjectDetector()
    if timeout is None:
        return detector.detect(root)

    pool = ThreadPoolExecutor(max_workers=1)
    try:
        future = pool.submit(detector.detect, root)
        try:
            return future.result(timeout=timeout)
        except FutureTimeout:
            logger.warning("Detection of %s exceeded %.1fs", root, timeout)
            raise FractalExploreError(
                f"Project detection timed out after {timeout:g}s",
                context={"path": str(root), "timeout": timeout},
            ) from None
    finally:
        pool.shutdown(wait=False)
