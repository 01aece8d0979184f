# src/infrastructure/output/trace_writer.py
import csv
import json
import logging
import os
from typing import Dict, Any, Optional, Sequence


FRAME_FIELDS = ["frame", "time_ms", "moving", "index", "offset", "symbols"]


class TraceWriter:
    """
    Writes recorded reel frames to disk. The format follows the file
    extension: ``.csv`` or ``.json``. Frames are any objects with a
    ``to_dict()`` returning the frame fields.
    """
    def __init__(self, json_indent: int = 2):
        self.logger = logging.getLogger("infrastructure.output.trace")
        self.json_indent = json_indent

    def write(self, file_path: str, frames: Sequence[Any],
              summary: Optional[Dict[str, Any]] = None) -> str:
        """
        Write frames, and for JSON an optional analysis summary.

        Args:
            file_path: Destination path ending in .csv or .json
            frames: Frames to write
            summary: Analysis to embed (JSON only)

        Returns:
            The path written

        Raises:
            ValueError: If the extension is not supported
        """
        extension = os.path.splitext(file_path)[1].lower()
        if extension not in (".csv", ".json"):
            raise ValueError(f"Unsupported trace format: {extension or file_path}")

        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        if extension == ".csv":
            self._write_csv(file_path, frames)
        else:
            self._write_json(file_path, frames, summary)

        self.logger.info(f"Wrote {len(frames)} frames to {file_path}")
        return file_path

    def _write_csv(self, file_path: str, frames: Sequence[Any]):
        with open(file_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=FRAME_FIELDS)
            writer.writeheader()
            for frame in frames:
                writer.writerow(frame.to_dict())

    def _write_json(self, file_path: str, frames: Sequence[Any], summary: Optional[Dict[str, Any]]):
        payload = {"frames": [frame.to_dict() for frame in frames]}
        if summary is not None:
            payload["summary"] = summary

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=self.json_indent, ensure_ascii=False)
