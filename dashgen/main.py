from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID, uuid4

from fastapi import Depends, FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from dashgen.config import Settings, configure_logging, settings
from dashgen.schemas import (
    ChartSpec,
    ChartUpdateRequest,
    ColumnSchema,
    DashboardInfo,
    DashboardResponse,
    FilterRequest,
    FilterSet,
    LoadedDashboardResponse,
    SaveDashboardRequest,
    SchemaOverrideRequest,
    UpdateDashboardRequest,
    UploadResponse,
)
from dashgen.services.analysis import analyze_table, build_dashboard, chart_series
from dashgen.services.export import chart_export_name, chart_to_csv, filtered_export_name, rows_to_csv
from dashgen.services.filters import apply_filters
from dashgen.services.parsing import FileParseError, parse_table
from dashgen.services.planner import charts_by_id, plan_charts, replace_chart
from dashgen.services.schema_builder import apply_type_overrides
from dashgen.storage.memory import DashboardRecord, DatasetBundle, InMemoryDashboardStore, InMemoryDatasetStore

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


dataset_store = InMemoryDatasetStore()
dashboard_store = InMemoryDashboardStore()


def get_store() -> InMemoryDatasetStore:
    return dataset_store


def get_dashboard_store() -> InMemoryDashboardStore:
    return dashboard_store


def get_settings() -> Settings:
    return settings


@app.post("/upload", response_model=UploadResponse)
async def upload_dataset(
    file: UploadFile = File(..., description="CSV or Excel dataset"),
    store: InMemoryDatasetStore = Depends(get_store),
    config: Settings = Depends(get_settings),
) -> UploadResponse:
    content = await file.read()
    if len(content) > config.MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail="File too large.")

    try:
        table = parse_table(content, file.filename or "")
    except FileParseError as exc:
        logger.warning("Rejected upload %r: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    columns, charts = analyze_table(table)
    dataset_id = uuid4()
    bundle = DatasetBundle(
        file_name=table.file_name,
        rows=table.rows,
        columns=columns,
        charts=charts_by_id(charts),
    )
    store.save_dataset(dataset_id, bundle)

    return UploadResponse(
        dataset_id=str(dataset_id),
        file_name=bundle.file_name,
        row_count=bundle.row_count,
        columns=columns,
    )


@app.get("/datasets/{dataset_id}/schema", response_model=List[ColumnSchema])
def get_schema(
    dataset_id: UUID,
    store: InMemoryDatasetStore = Depends(get_store),
) -> List[ColumnSchema]:
    return _get_dataset_bundle(store, dataset_id).columns


@app.put("/datasets/{dataset_id}/schema", response_model=List[ColumnSchema])
def override_schema(
    dataset_id: UUID,
    request: SchemaOverrideRequest,
    store: InMemoryDatasetStore = Depends(get_store),
) -> List[ColumnSchema]:
    bundle = _get_dataset_bundle(store, dataset_id)
    try:
        columns = apply_type_overrides(bundle.rows, bundle.columns, request.overrides)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc

    store.update_dataset(dataset_id, columns=columns, charts=charts_by_id(plan_charts(columns)))
    return columns


@app.get("/datasets/{dataset_id}/charts", response_model=List[ChartSpec])
def get_charts(
    dataset_id: UUID,
    store: InMemoryDatasetStore = Depends(get_store),
) -> List[ChartSpec]:
    return list(_get_dataset_bundle(store, dataset_id).charts.values())


@app.patch("/datasets/{dataset_id}/charts/{chart_id}", response_model=ChartSpec)
def update_chart(
    dataset_id: UUID,
    chart_id: str,
    request: ChartUpdateRequest,
    store: InMemoryDatasetStore = Depends(get_store),
) -> ChartSpec:
    bundle = _get_dataset_bundle(store, dataset_id)
    changes = request.model_dump(exclude_none=True)
    try:
        charts = replace_chart(bundle.charts, chart_id, **changes)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Chart not found.") from exc

    store.update_dataset(dataset_id, charts=charts)
    return charts[chart_id]


@app.post("/datasets/{dataset_id}/dashboard", response_model=DashboardResponse)
def get_dashboard(
    dataset_id: UUID,
    request: Optional[FilterRequest] = None,
    store: InMemoryDatasetStore = Depends(get_store),
    config: Settings = Depends(get_settings),
) -> DashboardResponse:
    bundle = _get_dataset_bundle(store, dataset_id)
    return build_dashboard(
        bundle.file_name,
        bundle.rows,
        bundle.columns,
        list(bundle.charts.values()),
        palette=config.CHART_PALETTE,
        filters=_filters_of(request),
    )


@app.post("/datasets/{dataset_id}/export")
def export_rows(
    dataset_id: UUID,
    request: Optional[FilterRequest] = None,
    store: InMemoryDatasetStore = Depends(get_store),
) -> Response:
    bundle = _get_dataset_bundle(store, dataset_id)
    filtered = apply_filters(bundle.rows, _filters_of(request))
    return _csv_response(rows_to_csv(filtered, bundle.column_names), filtered_export_name(bundle.file_name))


@app.post("/datasets/{dataset_id}/charts/{chart_id}/export")
def export_chart(
    dataset_id: UUID,
    chart_id: str,
    request: Optional[FilterRequest] = None,
    store: InMemoryDatasetStore = Depends(get_store),
) -> Response:
    bundle = _get_dataset_bundle(store, dataset_id)
    spec = bundle.charts.get(chart_id)
    if spec is None:
        raise HTTPException(status_code=404, detail="Chart not found.")
    points = chart_series(apply_filters(bundle.rows, _filters_of(request)), spec)
    return _csv_response(chart_to_csv(points), chart_export_name(spec.title))


@app.delete("/datasets/{dataset_id}", status_code=204)
def reset_dataset(
    dataset_id: UUID,
    store: InMemoryDatasetStore = Depends(get_store),
) -> Response:
    try:
        store.delete_dataset(dataset_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Dataset not found.") from exc
    return Response(status_code=204)


@app.post("/dashboards", response_model=DashboardInfo, status_code=201)
def save_dashboard(
    request: SaveDashboardRequest,
    store: InMemoryDatasetStore = Depends(get_store),
    dashboards: InMemoryDashboardStore = Depends(get_dashboard_store),
) -> DashboardInfo:
    try:
        dataset_id = UUID(request.dataset_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail="Dataset not found.") from exc
    bundle = _get_dataset_bundle(store, dataset_id)

    record = DashboardRecord(
        owner_id=request.owner_id,
        name=request.name.strip(),
        file_name=bundle.file_name,
        columns=bundle.columns,
        rows=bundle.rows,
        row_count=bundle.row_count,
        is_public=request.is_public,
    )
    return dashboards.create_dashboard(record).info()


@app.get("/dashboards", response_model=List[DashboardInfo])
def list_dashboards(
    owner_id: str = Query(..., min_length=1),
    dashboards: InMemoryDashboardStore = Depends(get_dashboard_store),
) -> List[DashboardInfo]:
    return [record.info() for record in dashboards.list_dashboards(owner_id)]


@app.get("/dashboards/{dashboard_id}", response_model=LoadedDashboardResponse)
def load_dashboard(
    dashboard_id: UUID,
    store: InMemoryDatasetStore = Depends(get_store),
    dashboards: InMemoryDashboardStore = Depends(get_dashboard_store),
) -> LoadedDashboardResponse:
    record = _get_dashboard_record(dashboards, dashboard_id)
    return _open_record(store, record)


@app.patch("/dashboards/{dashboard_id}", response_model=DashboardInfo)
def update_dashboard(
    dashboard_id: UUID,
    request: UpdateDashboardRequest,
    dashboards: InMemoryDashboardStore = Depends(get_dashboard_store),
) -> DashboardInfo:
    _get_dashboard_record(dashboards, dashboard_id)
    name = request.name.strip() if request.name is not None else None
    record = dashboards.update_dashboard(dashboard_id, name=name, is_public=request.is_public)
    return record.info()


@app.delete("/dashboards/{dashboard_id}", status_code=204)
def delete_dashboard(
    dashboard_id: UUID,
    dashboards: InMemoryDashboardStore = Depends(get_dashboard_store),
) -> Response:
    try:
        dashboards.delete_dashboard(dashboard_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Dashboard not found.") from exc
    return Response(status_code=204)


@app.get("/shared/{share_id}", response_model=LoadedDashboardResponse)
def load_shared_dashboard(
    share_id: str,
    store: InMemoryDatasetStore = Depends(get_store),
    dashboards: InMemoryDashboardStore = Depends(get_dashboard_store),
) -> LoadedDashboardResponse:
    try:
        record = dashboards.get_shared_dashboard(share_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Dashboard not found or is private.") from exc
    return _open_record(store, record)


def _open_record(store: InMemoryDatasetStore, record: DashboardRecord) -> LoadedDashboardResponse:
    # Saved dashboards keep schema and rows only; charts are re-planned on load.
    dataset_id = uuid4()
    bundle = DatasetBundle(
        file_name=record.file_name,
        rows=record.rows,
        columns=record.columns,
        charts=charts_by_id(plan_charts(record.columns)),
    )
    store.save_dataset(dataset_id, bundle)
    return LoadedDashboardResponse(dataset_id=str(dataset_id), dashboard=record.info(), columns=record.columns)


def _filters_of(request: Optional[FilterRequest]) -> Optional[FilterSet]:
    return request.filters if request is not None else None


def _csv_response(text: str, filename: str) -> Response:
    return Response(
        content=text.encode("utf-8"),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _get_dataset_bundle(store: InMemoryDatasetStore, dataset_id: UUID) -> DatasetBundle:
    try:
        return store.get_dataset(dataset_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Dataset not found.") from exc


def _get_dashboard_record(dashboards: InMemoryDashboardStore, dashboard_id: UUID) -> DashboardRecord:
    try:
        return dashboards.get_dashboard(dashboard_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Dashboard not found.") from exc
