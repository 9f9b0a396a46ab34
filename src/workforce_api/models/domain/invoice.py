"""Invoice domain model."""

from pydantic import BaseModel, Field

from workforce_api.utils.clock import now_millis


class Invoice(BaseModel):
    """Invoice domain model."""

    id: str | None = None
    project_id: str | None = None
    client: str | None = None
    amount: float = Field(default=0.0, ge=0)
    paid: bool = False
    issued_at: int = Field(default_factory=now_millis)

    class Config:
        """Pydantic config."""

        from_attributes = True
        validate_assignment = True

    @property
    def display_id(self) -> str:
        """Get the invoice id, or a placeholder for blank ids."""
        if not self.id or not self.id.strip():
            return "Invoice"
        return self.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Invoice):
            return NotImplemented
        return self.id == other.id
