"""Safe Transaction Service schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SafeConfirmation(BaseModel):
    """A single owner signature on a multisig transaction."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    owner: str = Field(..., description="Owner address that signed")
    signature: str | None = Field(default=None, description="Owner signature")
    signature_type: str | None = Field(
        default=None, alias="signatureType", description="EOA, CONTRACT_SIGNATURE, ..."
    )
    submission_date: datetime | None = Field(
        default=None, alias="submissionDate", description="When the signature was added"
    )


class SafeMultisigTransaction(BaseModel):
    """Multisig transaction as tracked by the Safe Transaction Service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    safe_tx_hash: str = Field(..., alias="safeTxHash", description="Safe internal hash")
    safe: str | None = Field(default=None, description="Safe contract address")
    to: str | None = Field(default=None, description="Call target")
    value: str | None = Field(default=None, description="Wei value as decimal string")
    nonce: int | None = Field(default=None, description="Safe nonce")
    is_executed: bool = Field(
        default=False, alias="isExecuted", description="Executed on-chain"
    )
    is_successful: bool | None = Field(
        default=None, alias="isSuccessful", description="Execution succeeded"
    )
    transaction_hash: str | None = Field(
        default=None, alias="transactionHash", description="Ledger hash once executed"
    )
    block_number: int | None = Field(
        default=None, alias="blockNumber", description="Execution block"
    )
    confirmations_required: int | None = Field(
        default=None, alias="confirmationsRequired", description="Safe threshold"
    )
    confirmations: list[SafeConfirmation] = Field(
        default_factory=list, description="Collected owner signatures"
    )
    submission_date: datetime | None = Field(
        default=None, alias="submissionDate", description="Proposal timestamp"
    )
    execution_date: datetime | None = Field(
        default=None, alias="executionDate", description="Execution timestamp"
    )

    @property
    def execution_hash(self) -> str | None:
        """Ledger transaction hash, available only once executed."""
        if not self.is_executed:
            return None
        return self.transaction_hash or None

    @property
    def confirmations_collected(self) -> int:
        return len(self.confirmations)

    @property
    def missing_confirmations(self) -> int | None:
        if self.confirmations_required is None:
            return None
        return max(self.confirmations_required - self.confirmations_collected, 0)
