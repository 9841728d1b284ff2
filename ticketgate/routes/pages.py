from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from ..auth import current_user, display_name, require_user
from ..db import get_db
from ..services.tickets import TicketStore

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent / "templates")


@router.get("/", response_class=HTMLResponse)
def index(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    ticket_count = TicketStore(db).count_all()
    user = current_user(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "ticket_count": ticket_count,
            "user": user,
            "user_name": display_name(user),
        },
    )


@router.get("/ticket/{ticket_id}", response_class=HTMLResponse)
def ticket_detail(
    ticket_id: str,
    request: Request,
    user: dict = Depends(require_user),
    db: Session = Depends(get_db),
) -> HTMLResponse:
    ticket = TicketStore(db).get_by_id(ticket_id)
    return templates.TemplateResponse(
        request,
        "ticket.html",
        {
            "ticket": ticket,
            "user_name": display_name(user),
        },
    )
