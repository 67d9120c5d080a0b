from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import from_json, to_json

from src.application.errors import DeserializationError, SerializationError
from src.domain.models.lot import Lot, LotProduct


class LotProductRecord(BaseModel):
    name: StrictStr = ""
    quantity: StrictInt = 0
    unit_value: StrictInt = Field(0, alias="unitValue")
    unit: StrictStr = ""


class LotRecord(BaseModel):
    """Stored shape of a Lot; absent keys decode to zero values."""

    id: StrictStr = Field("", alias="ID")
    nf_id: StrictStr = Field("", alias="nfId")
    lot_products: list[LotProductRecord] = Field(default_factory=list, alias="lotProducts")
    owner: StrictStr = ""
    owner_id: StrictInt = Field(0, alias="ownerId")
    lot_type: StrictStr = Field("", alias="lotType")
    created_at: StrictStr = Field("", alias="createdAt")
    total: StrictInt = 0
    formated_address: StrictStr = Field("", alias="formatedAddress")


def _record_keys(model: type[BaseModel]) -> frozenset[str]:
    return frozenset(f.alias or name for name, f in model.model_fields.items())


LOT_KEYS = _record_keys(LotRecord)
PRODUCT_KEYS = _record_keys(LotProductRecord)


def _split(data: dict[str, Any], keys: frozenset[str]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate stored keys into schema keys and leftovers.

    A null schema key is dropped so it decodes to its zero value.
    """
    known = {k: v for k, v in data.items() if k in keys and v is not None}
    extra = {k: v for k, v in data.items() if k not in keys}
    return known, extra


def _product_to_record(product: LotProduct) -> dict[str, Any]:
    return {
        **product.extra,
        "name": product.name,
        "quantity": product.quantity,
        "unitValue": product.unit_value,
        "unit": product.unit,
    }


class JSONLotCodec:
    """UTF-8 JSON encoding of Lots using the ledger's camelCase keys."""

    def to_record(self, lot: Lot) -> dict[str, Any]:
        # Known keys win over same-named leftovers in ``extra``
        payload = {
            **lot.extra,
            "ID": lot.id,
            "nfId": lot.nf_id,
            "lotProducts": [_product_to_record(p) for p in lot.lot_products],
            "owner": lot.owner,
            "ownerId": lot.owner_id,
            "lotType": lot.lot_type,
            "createdAt": lot.created_at,
            "total": lot.total,
            "formatedAddress": lot.formated_address,
        }
        try:
            LotRecord.model_validate(payload)
        except PydanticValidationError as exc:
            raise SerializationError(
                f"Lot {lot.id!r} cannot be encoded",
                details={"key": lot.id, "errors": _error_summary(exc)},
            ) from exc
        return payload

    def encode(self, lot: Lot) -> bytes:
        payload = self.to_record(lot)
        try:
            return to_json(payload)
        except (ValueError, TypeError) as exc:
            # Unknown fields may hold values JSON cannot represent
            raise SerializationError(
                f"Lot {lot.id!r} cannot be encoded", details={"key": lot.id}
            ) from exc

    def decode(self, data: bytes) -> Lot:
        try:
            parsed = from_json(data)
        except ValueError as exc:
            raise DeserializationError(
                "Stored value is not valid JSON", details={"errors": [str(exc)]}
            ) from exc
        return self._from_parsed(parsed, "Stored value is not a valid lot record")

    def decode_mapping(self, data: dict[str, Any]) -> Lot:
        """Decode an already-parsed record, e.g. an entry of a seed file."""
        return self._from_parsed(data, "Value is not a valid lot record")

    def _from_parsed(self, parsed: Any, message: str) -> Lot:
        if not isinstance(parsed, dict):
            raise DeserializationError(message, details={"errors": ["<root>: not an object"]})
        known, extra = _split(parsed, LOT_KEYS)
        products = known.get("lotProducts")
        if isinstance(products, list):
            known["lotProducts"] = [
                _split(p, PRODUCT_KEYS)[0] if isinstance(p, dict) else p for p in products
            ]
        try:
            record = LotRecord.model_validate(known)
        except PydanticValidationError as exc:
            raise DeserializationError(
                message, details={"errors": _error_summary(exc)}
            ) from exc
        return Lot(
            id=record.id,
            nf_id=record.nf_id,
            lot_products=[
                LotProduct(
                    name=p.name,
                    quantity=p.quantity,
                    unit_value=p.unit_value,
                    unit=p.unit,
                    extra=_split(raw, PRODUCT_KEYS)[1],
                )
                for p, raw in zip(record.lot_products, products or [])
            ],
            owner=record.owner,
            owner_id=record.owner_id,
            lot_type=record.lot_type,
            created_at=record.created_at,
            total=record.total,
            formated_address=record.formated_address,
            extra=extra,
        )


def _error_summary(exc: PydanticValidationError) -> list[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    ]
