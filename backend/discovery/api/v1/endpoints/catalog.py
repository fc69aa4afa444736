"""Catalog endpoints: search listing, facet listing, show page and email modal."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError

from discovery.catalog.search_state import SearchState
from discovery.catalog.urls import CatalogUrls
from discovery.core.app_exceptions import invalid_sort
from discovery.core.config import settings
from discovery.presenters.json_presenter import JsonPresenter
from discovery.schemas.catalog import EmailRecordForm
from discovery.search.service import CatalogSearchService, get_search_service
from discovery.services.email.service import send_document_record
from discovery.views.html import render_email_form, render_email_sent, render_show_page
from discovery.views.json_api import render_facet_json, render_index_json

logger = logging.getLogger(__name__)

router = APIRouter()


def get_catalog_urls(request: Request) -> CatalogUrls:
    """URL builders rooted at the current request's host."""
    return CatalogUrls.from_request(request, settings.API_PREFIX)


def _validated_state(request: Request, service: CatalogSearchService) -> SearchState:
    state = SearchState.from_query_params(request.query_params)
    if state.sort and service.config.sort_field_for(state.sort) is None:
        raise invalid_sort(state.sort, [sort_field.key for sort_field in service.config.sort_fields])
    return state


@router.get("/catalog", summary="Search the catalog")
def catalog_index(
    request: Request,
    q: str | None = Query(None, description="Search query string", max_length=500),
    search_field: str | None = Query(None, description="Search scope (all_fields, title, author, subject)"),
    sort: str | None = Query(None, description="Sort option"),
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    per_page: int | None = Query(
        None, ge=1, le=settings.CATALOG_MAX_PER_PAGE, description="Results per page"
    ),
    service: CatalogSearchService = Depends(get_search_service),
    urls: CatalogUrls = Depends(get_catalog_urls),
) -> JSONResponse:
    """
    Search results as a JSON:API-style document.

    Facet filters use ``f[field]=value`` (repeatable); they are read from the
    raw query string because their names are not known up front.
    """
    state = _validated_state(request, service)
    response = service.search(state)
    presenter = JsonPresenter(response, service.config)
    return JSONResponse(render_index_json(presenter, state, urls))


@router.get("/catalog/facet/{facet_field}", summary="Page through one facet's values")
def catalog_facet(
    request: Request,
    facet_field: str,
    facet_page: int = Query(1, ge=1, alias="facet.page"),
    facet_sort: Literal["count", "index"] | None = Query(None, alias="facet.sort"),
    service: CatalogSearchService = Depends(get_search_service),
    urls: CatalogUrls = Depends(get_catalog_urls),
) -> JSONResponse:
    state = _validated_state(request, service)
    facet_values = service.facet_values(state, facet_field, page=facet_page, sort=facet_sort)
    return JSONResponse(render_facet_json(facet_values, state, urls))


@router.get("/catalog/{document_id}", response_class=HTMLResponse, summary="Show a document")
def catalog_show(
    document_id: str,
    service: CatalogSearchService = Depends(get_search_service),
    urls: CatalogUrls = Depends(get_catalog_urls),
) -> HTMLResponse:
    document = service.fetch_document(document_id)
    similar = service.more_like_this(document.id)
    return HTMLResponse(render_show_page(document, similar, service.config, urls))


@router.get("/catalog/{document_id}/raw", summary="Stored fields of a document")
def catalog_raw(
    document_id: str,
    service: CatalogSearchService = Depends(get_search_service),
) -> JSONResponse:
    document = service.fetch_document(document_id)
    return JSONResponse({"id": document.id, **document.fields})


@router.get("/catalog/{document_id}/email", response_class=HTMLResponse, summary="Email modal")
def catalog_email_form(
    document_id: str,
    service: CatalogSearchService = Depends(get_search_service),
    urls: CatalogUrls = Depends(get_catalog_urls),
) -> HTMLResponse:
    document = service.fetch_document(document_id)
    return HTMLResponse(render_email_form(document, service.config, urls))


@router.post("/catalog/{document_id}/email", response_class=HTMLResponse, summary="Email a record")
def catalog_email_send(
    document_id: str,
    to: str = Form(""),
    message: str = Form(""),
    service: CatalogSearchService = Depends(get_search_service),
    urls: CatalogUrls = Depends(get_catalog_urls),
) -> HTMLResponse:
    document = service.fetch_document(document_id)

    try:
        form = EmailRecordForm(to=to, message=message or None)
    except ValidationError as e:
        field_errors = {".".join(str(loc) for loc in err["loc"]) for err in e.errors()}
        error = "You must enter a valid email address." if "to" in field_errors else "Message is too long."
        logger.info(f"Email form rejected for {document_id}", extra={"fields": sorted(field_errors)})
        return HTMLResponse(
            render_email_form(document, service.config, urls, to=to, message=message, error=error),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    send_document_record(document, str(form.to), service.config, urls, message=form.message)
    return HTMLResponse(render_email_sent(document, service.config, str(form.to)))
