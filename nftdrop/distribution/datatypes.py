from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


AccountId = str

TokenClass = str


class Ownership(Enum):
    OWNED = "OWNED"
    NOT_OWNED = "NOT_OWNED"
    QUERY_FAILED = "QUERY_FAILED"


class MintStatus(Enum):
    MINTED = "MINTED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TokenMetadata:
    title: Optional[str] = None
    description: Optional[str] = None
    media: Optional[str] = None
    media_hash: Optional[str] = None
    copies: Optional[int] = None
    issued_at: Optional[str] = None
    extra: Optional[str] = None
    reference: Optional[str] = None
    reference_hash: Optional[str] = None


@dataclass(frozen=True)
class Token:
    token_id: str
    owner_id: AccountId
    metadata: Optional[TokenMetadata] = None


@dataclass(frozen=True)
class ValidatedAccounts:
    normalized: list[AccountId]  # every input entry, trimmed and lower-cased
    valid: list[AccountId]
    invalid: list[AccountId]


@dataclass(frozen=True)
class MintOutcome:
    account: AccountId
    status: MintStatus
    detail: Optional[str] = None


@dataclass
class DistributionRun:
    contractId: int
    tokenNum: TokenClass
    amountPerTx: int
    outcomes: list[MintOutcome] = field(default_factory=list)

    def record(self, outcome: MintOutcome) -> MintOutcome:
        self.outcomes.append(outcome)
        return outcome

    def withStatus(self, status: MintStatus) -> list[AccountId]:
        return [o.account for o in self.outcomes if o.status == status]

    @property
    def minted(self) -> list[AccountId]:
        return self.withStatus(MintStatus.MINTED)

    @property
    def skipped(self) -> list[AccountId]:
        return self.withStatus(MintStatus.SKIPPED)

    @property
    def failed(self) -> list[AccountId]:
        return self.withStatus(MintStatus.FAILED)

    def summary(self) -> dict[MintStatus, int]:
        counts = {status: 0 for status in MintStatus}
        for o in self.outcomes:
            counts[o.status] += 1
        return counts
