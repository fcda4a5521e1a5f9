"""
Audit Dataset

Append-only JSON Lines file holding one record per audited URL.
"""

import asyncio
import json
from pathlib import Path
from typing import Iterator, Union

from pydantic import BaseModel


class Dataset:
    """
    JSON Lines dataset on disk.

    Writes are serialized with an asyncio lock so concurrent pages never
    interleave lines.

    Example:
        dataset = Dataset(Path("audit_output"))
        await dataset.push(record)
        rows = list(dataset.read())
    """

    def __init__(self, output_dir: Path, filename: str = "dataset.jsonl"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.output_dir / filename
        self._lock = asyncio.Lock()

    async def push(self, record: Union[BaseModel, dict]) -> dict:
        """Append a record and return it as a plain dict."""
        if isinstance(record, BaseModel):
            data = record.model_dump(mode="json", exclude_none=True)
        else:
            data = dict(record)

        line = json.dumps(data, ensure_ascii=False)
        async with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        return data

    def read(self) -> Iterator[dict]:
        if not self.path.exists():
            return
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    yield json.loads(line)
