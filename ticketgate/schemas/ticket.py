from pydantic import BaseModel, ConfigDict, Field


class TicketCreate(BaseModel):
    vatin: str | None = None
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class TicketCreated(BaseModel):
    message: str
    ticket_url: str = Field(alias="ticketUrl")
    qr_code_image: str = Field(alias="qrCodeImage")

    model_config = ConfigDict(populate_by_name=True)
