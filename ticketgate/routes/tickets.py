from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import TicketCreate, TicketCreated
from ..services.tickets import TicketStore, create_ticket

router = APIRouter(tags=["api"])


@router.post("/create-ticket", status_code=201, response_model=TicketCreated)
def create_ticket_endpoint(
    payload: TicketCreate, request: Request, db: Session = Depends(get_db)
) -> TicketCreated:
    settings = request.app.state.settings
    issued = create_ticket(
        TicketStore(db),
        payload,
        base_url=settings.base_url,
        limit=settings.max_tickets_per_vatin,
    )
    return TicketCreated(
        message="Ticket created",
        ticket_url=issued.ticket_url,
        qr_code_image=issued.qr_code_image,
    )
