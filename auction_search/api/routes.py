# auction_search/api/routes.py
from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.orm import Session
from ..db import get_db
from ..schemas import SearchPage, SearchParams
from ..search import search_items
from ..services import run_sync_job

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/api/search", response_model=SearchPage)
def search(
    # taken as raw strings so bad values fall back to defaults instead of a 422
    search_term: str | None = Query(None, alias="searchTerm"),
    page_number: str | None = Query(None, alias="pageNumber"),
    page_size: str | None = Query(None, alias="pageSize"),
    seller: str | None = Query(None),
    winner: str | None = Query(None),
    order_by: str | None = Query(None, alias="orderBy"),
    filter_by: str | None = Query(None, alias="filterBy"),
    db: Session = Depends(get_db)
):
    params = SearchParams(
        search_term=search_term,
        page_number=page_number,
        page_size=page_size,
        seller=seller,
        winner=winner,
        order_by=order_by,
        filter_by=filter_by,
    )
    return search_items(db, params)


@router.post("/api/sync", status_code=202)
def trigger_sync(request: Request, background_tasks: BackgroundTasks):
    state = request.app.state
    background_tasks.add_task(run_sync_job, state.session_factory, state.upstream)
    return {"status": "scheduled"}
