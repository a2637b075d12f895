"""Shared pydantic base for everything that travels to the remote service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.shared.errors import FieldOutOfRangeError

from . import validators


class WireModel(BaseModel):
    """Base for wire entities.

    Construction only assembles data; business rules run in ``validate``.
    Python attribute names may differ from the wire names, which are declared
    as field aliases.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        raise NotImplementedError

    def to_wire(self) -> dict[str, Any]:
        """Wire mapping with absent optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class BaseOrder(WireModel):
    """Identity shared by every order-shaped request."""

    merchant_order_id: int | None = Field(default=None, alias="id", frozen=True)

    def validate(self, is_weak: bool = False) -> None:  # type: ignore[override]
        validators.validate_object_not_null(self.merchant_order_id, "Merchant Order Id")
        if self.merchant_order_id <= 0:
            raise FieldOutOfRangeError(
                "Merchant Order Id", f"must be positive, got {self.merchant_order_id}"
            )
