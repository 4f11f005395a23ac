from dataclasses import dataclass, asdict
from typing import Optional, Union
from algosdk.transaction import StateSchema


@dataclass(frozen=True)
class ContractCode:
    approvalProgram: bytes
    clearProgram: bytes
    globalSchema: StateSchema
    localSchema: StateSchema
    extraPages: int = 0


@dataclass(frozen=True)
class InitialMetadata:
    name: str
    symbol: str
    uri: str
    icon: Optional[str] = None
    spec: Optional[str] = None
    reference: Optional[str] = None
    reference_hash: Optional[str] = None

    def toJson(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class DeployCode:
    code: ContractCode


@dataclass(frozen=True)
class FunctionCall:
    method: str
    args: dict
    budget: int
    deposit: int = 0


Action = Union[DeployCode, FunctionCall]


@dataclass(frozen=True)
class DeploymentPlan:
    target: Optional[int]  # application id, None when nothing is deployed yet
    actions: tuple[Action, ...]

    @property
    def deployAction(self) -> DeployCode:
        return self.actions[0]

    @property
    def initAction(self) -> Optional[FunctionCall]:
        return self.actions[1] if len(self.actions) > 1 else None


@dataclass
class DeploymentResult:
    txId: Optional[str]
    appId: Optional[int]
    explorerUrl: Optional[str]
    succeeded: bool
    detail: Optional[str] = None
