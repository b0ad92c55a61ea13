"""
In-memory dataset storage with TTL
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pandas as pd

from plotlab.config import settings
from plotlab.errors import DatasetNotFoundError

logger = logging.getLogger(__name__)


class DatasetStore:
    """In-memory dataset storage with TTL"""

    def __init__(self, ttl_hours: int = 24):
        self.datasets: Dict[str, pd.DataFrame] = {}
        self.metadata: Dict[str, dict] = {}
        self.ttl_hours = ttl_hours
        self._lock = threading.Lock()

    def set(self, dataset_id: str, df: pd.DataFrame, metadata: Optional[dict] = None):
        """Store dataframe with optional metadata"""
        now = datetime.now()
        with self._lock:
            self.datasets[dataset_id] = df
            self.metadata[dataset_id] = {
                "created_at": now,
                "last_accessed": now,
                "row_count": len(df),
                "col_count": len(df.columns),
                **(metadata or {})
            }

    def get(self, dataset_id: str) -> Optional[pd.DataFrame]:
        """Retrieve dataframe and update access time"""
        self.cleanup_expired()
        with self._lock:
            if dataset_id in self.datasets:
                self.metadata[dataset_id]["last_accessed"] = datetime.now()
                return self.datasets[dataset_id]
        return None

    def require(self, dataset_id: str) -> pd.DataFrame:
        """Like get(), but raise DatasetNotFoundError instead of returning None"""
        df = self.get(dataset_id)
        if df is None:
            raise DatasetNotFoundError(dataset_id)
        return df

    def get_metadata(self, dataset_id: str) -> Optional[dict]:
        self.cleanup_expired()
        return self.metadata.get(dataset_id)

    def exists(self, dataset_id: str) -> bool:
        self.cleanup_expired()
        return dataset_id in self.datasets

    def list_ids(self) -> List[str]:
        self.cleanup_expired()
        return sorted(self.datasets)

    def delete(self, dataset_id: str) -> bool:
        """Delete dataset; returns False when nothing was stored under the id"""
        with self._lock:
            found = dataset_id in self.datasets
            self.datasets.pop(dataset_id, None)
            self.metadata.pop(dataset_id, None)
        return found

    def cleanup_expired(self) -> int:
        """Remove expired datasets"""
        now = datetime.now()
        ttl = timedelta(hours=self.ttl_hours)

        with self._lock:
            expired = [
                dataset_id
                for dataset_id, meta in self.metadata.items()
                if now - meta["last_accessed"] > ttl
            ]
            for dataset_id in expired:
                self.datasets.pop(dataset_id, None)
                self.metadata.pop(dataset_id, None)

        if expired:
            logger.info("Evicted %d expired dataset(s)", len(expired))
        return len(expired)

    def get_stats(self) -> dict:
        """Get storage statistics"""
        return {
            "active_datasets": len(self.datasets),
            "total_memory_mb": sum(
                df.memory_usage(deep=True).sum() / (1024 * 1024)
                for df in self.datasets.values()
            )
        }


# Global instance
store = DatasetStore(ttl_hours=settings.session_ttl_hours)
