import logging
import re
import uuid
from dataclasses import dataclass

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFound, QuotaExceeded, StoreError, ValidationError
from ..models import Ticket
from ..schemas import TicketCreate
from . import qr

logger = logging.getLogger(__name__)

VATIN_PATTERN = re.compile(r"[0-9]{11}")


@dataclass(frozen=True)
class IssuedTicket:
    ticket_id: uuid.UUID
    ticket_url: str
    qr_code_image: str


class TicketStore:
    """Append-only access to the ``tickets`` table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def count_by_vatin(self, vatin: str) -> int:
        try:
            return (
                self.db.execute(
                    select(func.count()).select_from(Ticket).where(Ticket.vatin == vatin)
                ).scalar()
                or 0
            )
        except SQLAlchemyError as exc:
            logger.exception("Counting tickets for a VATIN failed")
            raise StoreError("Internal server error") from exc

    def count_all(self) -> int:
        try:
            return self.db.execute(select(func.count()).select_from(Ticket)).scalar() or 0
        except SQLAlchemyError as exc:
            logger.exception("Counting tickets failed")
            raise StoreError("Internal server error") from exc

    def get_by_id(self, ticket_id: uuid.UUID | str) -> Ticket:
        if not isinstance(ticket_id, uuid.UUID):
            try:
                ticket_id = uuid.UUID(str(ticket_id))
            except ValueError:
                raise NotFound("Ticket not found") from None
        try:
            ticket = self.db.get(Ticket, ticket_id)
        except SQLAlchemyError as exc:
            logger.exception("Loading ticket %s failed", ticket_id)
            raise StoreError("Internal server error") from exc
        if ticket is None:
            raise NotFound("Ticket not found")
        return ticket

    def lock_vatin(self, vatin: str) -> None:
        # Serializes quota check and insert per VATIN until the transaction ends.
        if self.db.get_bind().dialect.name != "postgresql":
            return
        try:
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:vatin))"),
                {"vatin": vatin},
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Locking VATIN failed")
            raise StoreError("Internal server error") from exc

    def insert(self, ticket: Ticket) -> Ticket:
        try:
            self.db.add(ticket)
            self.db.commit()
            self.db.refresh(ticket)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Ticket insert failed")
            raise StoreError("Internal server error") from exc
        return ticket

    def rollback(self) -> None:
        self.db.rollback()


def validate_request(payload: TicketCreate) -> tuple[str, str, str]:
    vatin = payload.vatin or ""
    first_name = payload.first_name or ""
    last_name = payload.last_name or ""

    if not vatin or not first_name or not last_name:
        raise ValidationError("All fields are required.")
    if not VATIN_PATTERN.fullmatch(vatin):
        raise ValidationError("VATIN must have exactly 11 digits.")
    return vatin, first_name, last_name


def ticket_url(base_url: str, ticket_id: uuid.UUID) -> str:
    return f"{base_url.rstrip('/')}/ticket/{ticket_id}"


def create_ticket(
    store: TicketStore, payload: TicketCreate, base_url: str, limit: int = 3
) -> IssuedTicket:
    vatin, first_name, last_name = validate_request(payload)

    store.lock_vatin(vatin)
    if store.count_by_vatin(vatin) >= limit:
        store.rollback()
        logger.warning("Ticket quota of %s reached for a VATIN", limit)
        raise QuotaExceeded(f"Maximum of {limit} tickets per person.")

    ticket = store.insert(
        Ticket(
            id=uuid.uuid4(),
            vatin=vatin,
            first_name=first_name,
            last_name=last_name,
        )
    )
    logger.info("Issued ticket %s", ticket.id)

    url = ticket_url(base_url, ticket.id)
    return IssuedTicket(
        ticket_id=ticket.id,
        ticket_url=url,
        qr_code_image=qr.encode_data_url(url),
    )
