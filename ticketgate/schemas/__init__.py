from .ticket import TicketCreate, TicketCreated

__all__ = ["TicketCreate", "TicketCreated"]
