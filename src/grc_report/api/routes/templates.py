"""Per-organization report template endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from grc_report.composer.template import has_placeholder
from grc_report.templates import TemplateStore

log = logging.getLogger(__name__)

router = APIRouter(tags=["templates"])


class TemplateResponse(BaseModel):
    """An organization's effective report template."""

    organization_id: str
    template: str
    is_custom: bool
    has_placeholder: bool


class TemplateUpdate(BaseModel):
    """New template HTML as saved by the template editor."""

    template: str


def _store(req: Request) -> TemplateStore:
    return req.app.state.template_store


def _response(org_id: str, template: str, is_custom: bool) -> TemplateResponse:
    return TemplateResponse(
        organization_id=org_id,
        template=template,
        is_custom=is_custom,
        has_placeholder=has_placeholder(template),
    )


@router.get("/organizations/{org_id}/report-template", response_model=TemplateResponse)
async def get_template(org_id: str, req: Request) -> TemplateResponse:
    """The organization's template, or the default when it has none."""
    store = _store(req)
    return _response(org_id, store.get(org_id), store.is_custom(org_id))


@router.put("/organizations/{org_id}/report-template", response_model=TemplateResponse)
async def put_template(org_id: str, body: TemplateUpdate, req: Request) -> TemplateResponse:
    stored = _store(req).save(org_id, body.template)
    if not has_placeholder(stored):
        log.info(f"Template for organization {org_id} has no table placeholder; the table will follow it")
    return _response(org_id, stored, True)


@router.delete("/organizations/{org_id}/report-template", status_code=204)
async def delete_template(org_id: str, req: Request) -> None:
    """Remove the organization's template. Raises 404 when it has none."""
    store = _store(req)
    if not store.is_custom(org_id):
        raise KeyError(f"No report template stored for organization {org_id}")
    store.delete(org_id)
