"""
Library Catalog Backend — Author Route Handlers
=================================================

What:  The eight author pages: list, detail, create/update/delete forms and
       their submissions.
How:   Each handler calls AuthorService and either renders a Jinja2 template
       or redirects. Successful POSTs answer 303 See Other so the browser
       follows up with a GET.

Route Inventory (prefix /catalog):
    GET  /authors                 → author_list.html
    GET  /authors/create          → author_form.html (empty)
    POST /authors/create          → 303 detail | author_form.html with errors
    GET  /authors/{id}            → author_detail.html | 404
    GET  /authors/{id}/delete     → author_delete.html | 303 list
    POST /authors/{id}/delete     → 303 list | author_delete.html (blocked)
    GET  /authors/{id}/update     → author_form.html (pre-filled) | 404
    POST /authors/{id}/update     → 303 detail | author_form.html with errors

NotFoundError and DatabaseError propagate to the global handlers in main.py.
"""

from typing import Dict

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.database import get_session_factory
from catalog.repositories import AuthorRepository, BookRepository
from catalog.services.author_service import AuthorService
from catalog.templating import templates

AUTHOR_LIST_PATH = "/catalog/authors"

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/catalog", tags=["Authors"])


def get_author_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AuthorService:
    """Builds an AuthorService over the injected session factory."""
    return AuthorService(
        authors=AuthorRepository(session_factory),
        books=BookRepository(session_factory),
    )


def _author_form(
    first_name: str = Form(default=""),
    family_name: str = Form(default=""),
    date_of_birth: str = Form(default=""),
    date_of_death: str = Form(default=""),
) -> Dict[str, str]:
    return {
        "first_name": first_name,
        "family_name": family_name,
        "date_of_birth": date_of_birth,
        "date_of_death": date_of_death,
    }


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


# ══════════════════════════════════════════════════════════════════════════
# List & Detail
# ══════════════════════════════════════════════════════════════════════════

@router.get("/authors", response_class=HTMLResponse, summary="List all authors")
async def author_list(
    request: Request,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    authors = await service.list_authors()
    return templates.TemplateResponse(
        request,
        "author_list.html",
        {"title": "Author List", "author_list": authors},
    )


# ══════════════════════════════════════════════════════════════════════════
# Create
# Declared before /authors/{author_id} so "create" is not taken as an id.
# ══════════════════════════════════════════════════════════════════════════

@router.get("/authors/create", response_class=HTMLResponse, summary="Author create form")
async def author_create_get(request: Request) -> Response:
    return templates.TemplateResponse(request, "author_form.html", {"title": "Create Author"})


@router.post("/authors/create", response_class=HTMLResponse, summary="Create an author")
async def author_create_post(
    request: Request,
    form: Dict[str, str] = Depends(_author_form),
    service: AuthorService = Depends(get_author_service),
) -> Response:
    outcome = await service.create_author(form)
    if not outcome.saved:
        return templates.TemplateResponse(
            request,
            "author_form.html",
            {"title": "Create Author", "author": outcome.author, "errors": outcome.errors},
        )
    return _redirect(outcome.author.url)


@router.get("/authors/{author_id}", response_class=HTMLResponse, summary="Author detail")
async def author_detail(
    request: Request,
    author_id: str,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    detail = await service.get_author_detail(author_id)
    return templates.TemplateResponse(
        request,
        "author_detail.html",
        {"title": "Author Detail", "author": detail.author, "author_books": detail.books},
    )


# ══════════════════════════════════════════════════════════════════════════
# Delete
# ══════════════════════════════════════════════════════════════════════════

@router.get("/authors/{author_id}/delete", response_class=HTMLResponse, summary="Author delete confirmation")
async def author_delete_get(
    request: Request,
    author_id: str,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    detail = await service.find_author_with_books(author_id)
    if detail.author is None:
        return _redirect(AUTHOR_LIST_PATH)

    return templates.TemplateResponse(
        request,
        "author_delete.html",
        {"title": "Delete Author", "author": detail.author, "author_books": detail.books},
    )


@router.post("/authors/{author_id}/delete", response_class=HTMLResponse, summary="Delete an author")
async def author_delete_post(
    request: Request,
    author_id: str,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    outcome = await service.delete_author(author_id)
    if outcome.blocked:
        return templates.TemplateResponse(
            request,
            "author_delete.html",
            {"title": "Delete Author", "author": outcome.author, "author_books": outcome.books},
        )
    return _redirect(AUTHOR_LIST_PATH)


# ══════════════════════════════════════════════════════════════════════════
# Update
# ══════════════════════════════════════════════════════════════════════════

@router.get("/authors/{author_id}/update", response_class=HTMLResponse, summary="Author update form")
async def author_update_get(
    request: Request,
    author_id: str,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    author = await service.get_author(author_id)
    return templates.TemplateResponse(
        request,
        "author_form.html",
        {"title": "Update Author", "author": author},
    )


@router.post("/authors/{author_id}/update", response_class=HTMLResponse, summary="Update an author")
async def author_update_post(
    request: Request,
    author_id: str,
    form: Dict[str, str] = Depends(_author_form),
    service: AuthorService = Depends(get_author_service),
) -> Response:
    outcome = await service.update_author(author_id, form)
    if not outcome.saved:
        return templates.TemplateResponse(
            request,
            "author_form.html",
            {"title": "Update Author", "author": outcome.author, "errors": outcome.errors},
        )
    return _redirect(outcome.author.url)
