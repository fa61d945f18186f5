from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence
from uuid import UUID, uuid4

from dashgen.schemas import ColumnSchema, DashboardInfo
from dashgen.services.planner import ChartCollection

logger = logging.getLogger(__name__)

SHARE_ID_LENGTH = 8

Row = Mapping[str, object]


@dataclass(frozen=True)
class DatasetBundle:
    file_name: str
    rows: Sequence[Row]
    columns: List[ColumnSchema]
    charts: ChartCollection

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]


@dataclass
class DashboardRecord:
    owner_id: str
    name: str
    file_name: str
    columns: List[ColumnSchema]
    rows: Sequence[Row]
    row_count: int
    is_public: bool = False
    share_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def info(self) -> DashboardInfo:
        return DashboardInfo(
            id=str(self.id),
            owner_id=self.owner_id,
            name=self.name,
            file_name=self.file_name,
            row_count=self.row_count,
            is_public=self.is_public,
            share_id=self.share_id,
            created_at=self.created_at,
        )


def new_share_id() -> str:
    return uuid4().hex[:SHARE_ID_LENGTH]


class InMemoryDatasetStore:
    """Session datasets keyed by id. Bundles are replaced, never edited."""

    def __init__(self) -> None:
        self._datasets: Dict[UUID, DatasetBundle] = {}

    def save_dataset(self, dataset_id: UUID, bundle: DatasetBundle) -> None:
        self._datasets[dataset_id] = bundle

    def get_dataset(self, dataset_id: UUID) -> DatasetBundle:
        try:
            return self._datasets[dataset_id]
        except KeyError as exc:
            raise KeyError("Dataset not found") from exc

    def update_dataset(self, dataset_id: UUID, **changes: object) -> DatasetBundle:
        bundle = replace(self.get_dataset(dataset_id), **changes)
        self._datasets[dataset_id] = bundle
        return bundle

    def delete_dataset(self, dataset_id: UUID) -> None:
        if self._datasets.pop(dataset_id, None) is None:
            raise KeyError("Dataset not found")

    def dataset_exists(self, dataset_id: UUID) -> bool:
        return dataset_id in self._datasets


class InMemoryDashboardStore:
    """Saved dashboards with a public flag and an optional share token."""

    def __init__(self) -> None:
        self._dashboards: Dict[UUID, DashboardRecord] = {}

    def create_dashboard(self, record: DashboardRecord) -> DashboardRecord:
        if record.is_public and not record.share_id:
            record.share_id = new_share_id()
        self._dashboards[record.id] = record
        logger.info("Saved dashboard %s (%s) for owner %s", record.id, record.name, record.owner_id)
        return record

    def get_dashboard(self, dashboard_id: UUID) -> DashboardRecord:
        try:
            return self._dashboards[dashboard_id]
        except KeyError as exc:
            raise KeyError("Dashboard not found") from exc

    def list_dashboards(self, owner_id: str) -> List[DashboardRecord]:
        owned = [record for record in self._dashboards.values() if record.owner_id == owner_id]
        return sorted(owned, key=lambda record: record.created_at, reverse=True)

    def update_dashboard(
        self,
        dashboard_id: UUID,
        *,
        name: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> DashboardRecord:
        record = self.get_dashboard(dashboard_id)
        if name is not None:
            record.name = name
        if is_public is not None:
            record.is_public = is_public
            # The share id survives unpublishing so links work again after re-publishing.
            if is_public and not record.share_id:
                record.share_id = new_share_id()
        return record

    def delete_dashboard(self, dashboard_id: UUID) -> None:
        if self._dashboards.pop(dashboard_id, None) is None:
            raise KeyError("Dashboard not found")
        logger.info("Deleted dashboard %s", dashboard_id)

    def get_shared_dashboard(self, share_id: str) -> DashboardRecord:
        for record in self._dashboards.values():
            if record.share_id == share_id and record.is_public:
                return record
        raise KeyError("Shared dashboard not found")
