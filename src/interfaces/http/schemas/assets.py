from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.lot import Lot, LotProduct


class LotProductSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    quantity: int = Field(ge=0)
    unit_value: int = Field(alias="unitValue", ge=0)
    unit: str

    def to_domain(self) -> LotProduct:
        return LotProduct(
            name=self.name, quantity=self.quantity, unit_value=self.unit_value, unit=self.unit
        )


class LotCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="ID", min_length=1)
    nf_id: str = Field("", alias="nfId")
    lot_products: list[LotProductSchema] = Field(default_factory=list, alias="lotProducts")
    owner: str = ""
    owner_id: int = Field(0, alias="ownerId")
    lot_type: str = Field("", alias="lotType")
    created_at: str = Field("", alias="createdAt")
    total: int = 0
    formated_address: str = Field("", alias="formatedAddress")


class LotTransfer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_owner: str = Field(alias="newOwner")
    new_owner_id: int = Field(alias="newOwnerId")


class LotProductResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    quantity: int
    unit_value: int = Field(alias="unitValue")
    unit: str


class LotResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="ID")
    nf_id: str = Field(alias="nfId")
    lot_products: list[LotProductResponse] = Field(alias="lotProducts")
    owner: str
    owner_id: int = Field(alias="ownerId")
    lot_type: str = Field(alias="lotType")
    created_at: str = Field(alias="createdAt")
    total: int
    formated_address: str = Field(alias="formatedAddress")

    @classmethod
    def from_domain(cls, lot: Lot) -> LotResponse:
        return cls(
            id=lot.id,
            nf_id=lot.nf_id,
            lot_products=[
                LotProductResponse(
                    name=p.name, quantity=p.quantity, unit_value=p.unit_value, unit=p.unit
                )
                for p in lot.lot_products
            ],
            owner=lot.owner,
            owner_id=lot.owner_id,
            lot_type=lot.lot_type,
            created_at=lot.created_at,
            total=lot.total,
            formated_address=lot.formated_address,
        )


class ExistsResponse(BaseModel):
    exists: bool


class InitLedgerResponse(BaseModel):
    written: int
