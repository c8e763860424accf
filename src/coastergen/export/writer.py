"""
Track file writer - Persist an exported byte buffer.

The codec never touches the filesystem; this writer takes a finished
buffer and a file name and reports failures as ExportError.
"""

from dataclasses import dataclass
from pathlib import Path
import logging

from coastergen.export.nl2_csv import DEFAULT_FILENAME, EXPORT_EXTENSIONS


logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """Writing an export failed. The message is meant for the user."""


@dataclass
class WriterConfig:
    """Writer configuration."""
    output_dir: str = "."
    overwrite: bool = True


class TrackFileWriter:
    """Write exported tracks to disk.

    Usage:
        writer = TrackFileWriter(WriterConfig(output_dir="./tracks"))
        path = writer.save(export_bytes(points), "track.csv")
    """

    def __init__(self, config: WriterConfig | None = None):
        """Initialize writer.

        Args:
            config: Writer configuration
        """
        self.config = config or WriterConfig()
        self._output_path = Path(self.config.output_dir)

    def resolve(self, filename: str) -> Path:
        """Target path for a file name.

        Absolute names are used as given; relative names land in the
        output directory.
        """
        path = Path(filename)
        if not path.is_absolute():
            path = self._output_path / path
        return path

    def save(self, data: bytes, filename: str = DEFAULT_FILENAME) -> Path:
        """Write a buffer to a file.

        Args:
            data: Encoded export
            filename: File name (.csv or .txt)

        Returns:
            Path to the written file

        Raises:
            ExportError: Bad extension, existing file without overwrite,
                or an OS-level write failure
        """
        path = self.resolve(filename)

        if path.suffix.lower() not in EXPORT_EXTENSIONS:
            raise ExportError(
                f"Unsupported file type '{path.suffix}', use one of {', '.join(EXPORT_EXTENSIONS)}"
            )
        if path.exists() and not self.config.overwrite:
            raise ExportError(f"File already exists: {path}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as exc:
            raise ExportError(f"Could not write {path}: {exc.strerror or exc}") from exc

        logger.info("Exported %d bytes to %s", len(data), path)
        return path
