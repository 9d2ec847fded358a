# app/services/training_file_repository.py
import threading
from typing import Dict, List, Optional

from app.core.exceptions import NotFoundException
from app.schemas.training_file import TrainingFile


class TrainingFileRepository:
    """
    In-process store for training file records and their uploaded bytes.

    Records are kept in insertion order. The stored bytes are only used to
    re-run extraction and are never returned to API clients.
    """

    def __init__(self):
        self._records: Dict[str, TrainingFile] = {}
        self._contents: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def add(self, training_file: TrainingFile, file_content: bytes) -> TrainingFile:
        with self._lock:
            self._records[training_file.id] = training_file
            self._contents[training_file.id] = file_content
        return training_file

    def get(self, file_id: str) -> Optional[TrainingFile]:
        with self._lock:
            return self._records.get(file_id)

    def get_or_raise(self, file_id: str) -> TrainingFile:
        training_file = self.get(file_id)
        if training_file is None:
            raise NotFoundException(f"Training file with ID {file_id} not found")
        return training_file

    def get_content(self, file_id: str) -> bytes:
        with self._lock:
            if file_id not in self._contents:
                raise NotFoundException(f"No stored content for training file {file_id}")
            return self._contents[file_id]

    def list(self) -> List[TrainingFile]:
        with self._lock:
            return list(self._records.values())

    def update(self, file_id: str, **changes) -> TrainingFile:
        """Apply field changes to a record and return the updated copy"""
        with self._lock:
            current = self._records.get(file_id)
            if current is None:
                raise NotFoundException(f"Training file with ID {file_id} not found")
            updated = current.model_copy(update=changes)
            self._records[file_id] = updated
            return updated

    def delete(self, file_id: str) -> None:
        with self._lock:
            if file_id not in self._records:
                raise NotFoundException(f"Training file with ID {file_id} not found")
            del self._records[file_id]
            self._contents.pop(file_id, None)
