import logging
from pathlib import Path


logger = logging.getLogger(__name__)


def write_image(image: bytes, output_path: Path) -> Path:
    """Write image bytes to ``output_path``, replacing any old file."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(image)
    logger.info("Saved image to %s", output_path)
    return output_path
