"""PIX charge Pydantic schemas for API request/response models."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PixChargeCreate(BaseModel):
    """Schema for creating a PIX charge.

    `amount` is accepted for compatibility with older checkout pages but
    ignored: prices come from the product.
    """

    model_config = ConfigDict(from_attributes=True)

    type: str = Field(
        validation_alias=AliasChoices("type", "product"),
        description="Product: subscription or whatsapp",
    )
    document: str | None = Field(default=None, description="Payer CPF, any formatting")
    name: str | None = Field(default=None, description="Payer name")
    email: str | None = Field(default=None, description="Payer e-mail")
    phone: str | None = Field(default=None, description="Payer phone")
    amount: int | None = Field(default=None, description="Ignored; price is fixed per product")


class PixChargeResponse(BaseModel):
    """Canonical PIX payload rendered by the checkout page."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    code: str = Field(description="PIX copy-and-paste code")
    image_base64: str | None = Field(default=None, alias="imageBase64", description="QR code PNG, base64")
    external_id: str = Field(alias="externalId", description="Gateway correlation id")
    order_id: str | None = Field(default=None, alias="orderId", description="Order id to subscribe to")
