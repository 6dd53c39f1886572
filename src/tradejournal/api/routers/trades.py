"""Trade journal endpoints.

Every handler is async: the trade collection and its session are only touched
from the event loop thread.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import Response

from tradejournal.api.deps import (
    get_csv_importer,
    get_csv_template_generator,
    get_exporter,
    get_sync_engine,
    get_trade_service,
)
from tradejournal.api.schemas import (
    ImportSummaryResponse,
    TradeCreateRequest,
    TradeIdsRequest,
    TradeListResponse,
    TradeResponse,
    TradeUpdateRequest,
)
from tradejournal.core.timezone import now_utc
from tradejournal.csv import CsvImportParser, CsvTemplateGenerator, TradeExporter
from tradejournal.domain.models import TradeStatus
from tradejournal.services import PriceSyncEngine, TradeService

router = APIRouter(prefix="/trades", tags=["trades"])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("", response_model=TradeListResponse)
async def list_trades(
    status_filter: Optional[TradeStatus] = Query(None, alias="status"),
    trades: TradeService = Depends(get_trade_service),
) -> TradeListResponse:
    """List trades, optionally filtered by status."""
    items = trades.list_trades(status=status_filter)
    return TradeListResponse(
        trades=[TradeResponse.from_domain(t) for t in items],
        total=len(items),
    )


@router.get("/export")
async def export_trades(
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    trades: TradeService = Depends(get_trade_service),
    exporter: TradeExporter = Depends(get_exporter),
) -> Response:
    """Export every trade as a CSV or xlsx download."""
    items = trades.list_trades()
    stamp = now_utc().strftime("%Y-%m-%d")
    if format == "xlsx":
        return Response(
            content=exporter.to_xlsx_bytes(items),
            media_type=XLSX_MEDIA_TYPE,
            headers=_attachment(f"trades_{stamp}.xlsx"),
        )
    return Response(
        content=exporter.to_csv_bytes(items),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment(f"trades_{stamp}.csv"),
    )


@router.get("/template")
async def download_template(
    generator: CsvTemplateGenerator = Depends(get_csv_template_generator),
) -> Response:
    """Download a CSV import template with one example row."""
    return Response(
        content=generator.template_bytes(),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment("trade_import_template.csv"),
    )


@router.post("/import", response_model=ImportSummaryResponse)
async def import_trades(
    file: UploadFile = File(...),
    importer: CsvImportParser = Depends(get_csv_importer),
    trades: TradeService = Depends(get_trade_service),
    engine: PriceSyncEngine = Depends(get_sync_engine),
) -> ImportSummaryResponse:
    """
    Import trades from a CSV file.

    Structural problems reject the whole file; invalid rows are skipped and
    reported in warnings.
    """
    content = await file.read()
    result = importer.parse(content)
    created = trades.bulk_add(result.trades)
    await engine.refresh_now()
    return ImportSummaryResponse(
        imported_count=result.imported_count,
        skipped_count=result.skipped_count,
        trades=[TradeResponse.from_domain(trades.get_trade(t.trade_id)) for t in created],
        warnings=[str(w) for w in result.warnings],
    )


@router.post("/bulk-delete", status_code=status.HTTP_204_NO_CONTENT)
async def bulk_delete_trades(
    request: TradeIdsRequest,
    trades: TradeService = Depends(get_trade_service),
) -> None:
    """Delete several trades at once."""
    trades.bulk_delete(request.trade_ids)


@router.post("/bulk-close", response_model=TradeListResponse)
async def bulk_close_trades(
    request: TradeIdsRequest,
    trades: TradeService = Depends(get_trade_service),
) -> TradeListResponse:
    """Close selected open trades at their current live price."""
    closed = trades.bulk_close(request.trade_ids)
    return TradeListResponse(
        trades=[TradeResponse.from_domain(t) for t in closed],
        total=len(closed),
    )


@router.post("", response_model=TradeResponse, status_code=status.HTTP_201_CREATED)
async def create_trade(
    request: TradeCreateRequest,
    trades: TradeService = Depends(get_trade_service),
    engine: PriceSyncEngine = Depends(get_sync_engine),
) -> TradeResponse:
    """Log a new open trade and price it immediately."""
    trade = trades.add_trade(request.to_domain())
    await engine.refresh_now()
    return TradeResponse.from_domain(trades.get_trade(trade.trade_id))


@router.get("/{trade_id}", response_model=TradeResponse)
async def get_trade(
    trade_id: int,
    trades: TradeService = Depends(get_trade_service),
) -> TradeResponse:
    """Get a trade by ID."""
    return TradeResponse.from_domain(trades.get_trade(trade_id))


@router.put("/{trade_id}", response_model=TradeResponse)
async def update_trade(
    trade_id: int,
    request: TradeUpdateRequest,
    trades: TradeService = Depends(get_trade_service),
    engine: PriceSyncEngine = Depends(get_sync_engine),
) -> TradeResponse:
    """Replace a trade's fields and re-sync its price."""
    current = trades.get_trade(trade_id)
    trades.update_trade(trade_id, request.to_domain(request.status or current.status))
    await engine.refresh_now()
    return TradeResponse.from_domain(trades.get_trade(trade_id))


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trade(
    trade_id: int,
    trades: TradeService = Depends(get_trade_service),
) -> None:
    """Delete a trade."""
    trades.get_trade(trade_id)
    trades.delete_trade(trade_id)
