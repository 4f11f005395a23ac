import base64
import logging
from typing import Optional
from algosdk.atomic_transaction_composer import AtomicTransactionComposer
from algosdk.transaction import (
    ApplicationUpdateTxn,
    StateSchema,
    SuggestedParams,
    Transaction,
)
from algosdk.v2client.algod import AlgodClient
from ..abi_contracts import nftABIContract
from ..config import INIT_BUDGET, MIN_TXN_FEE, Account, OpUp
from ..contract import encodeArgs
from ..opup import budgetedCallFee, coverBudget
from ..state_utils import get_newest_created_app, has_deployed_code
from ..transaction_utils import (
    signer,
    sp_fee,
    remove_signer_and_group,
    signAndSend,
    explorerUrl,
)
from .datatypes import (
    Action,
    ContractCode,
    DeployCode,
    DeploymentPlan,
    DeploymentResult,
    FunctionCall,
)

logger = logging.getLogger(__name__)

INIT_METHOD = "new"

# token storage lives in boxes, global state only keeps the owner and collection metadata
GLOBAL_SCHEMA = StateSchema(num_uints=2, num_byte_slices=4)
LOCAL_SCHEMA = StateSchema(num_uints=0, num_byte_slices=0)
EXTRA_PAGES = 3


class TransactionBuilder:
    """Accumulates the actions of one transaction against a target application."""

    def __init__(self, target: Optional[int]):
        self.target = target
        self.actions: list[Action] = []

    def deployContract(self, code: ContractCode) -> "TransactionBuilder":
        self.actions.append(DeployCode(code))
        return self

    def functionCall(self, method: str, args: dict, budget: int, deposit: int = 0) -> "TransactionBuilder":
        self.actions.append(FunctionCall(method, args, budget, deposit))
        return self

    def build(self) -> DeploymentPlan:
        if not self.actions or not isinstance(self.actions[0], DeployCode):
            raise ValueError("Deployment must start with a deploy action")
        return DeploymentPlan(self.target, tuple(self.actions))


def compileProgram(algod: AlgodClient, source: str) -> bytes:
    return base64.b64decode(algod.compile(source)["result"])


def loadContractCode(algod: AlgodClient, approvalPath: str, clearPath: str) -> ContractCode:
    """
    Reads and compiles the approval and clear TEAL programs of the contract.
    """
    with open(approvalPath, "r") as f:
        approvalProgram = compileProgram(algod, f.read())
    with open(clearPath, "r") as f:
        clearProgram = compileProgram(algod, f.read())
    return ContractCode(approvalProgram, clearProgram, GLOBAL_SCHEMA, LOCAL_SCHEMA, EXTRA_PAGES)


def resolveTarget(algod: AlgodClient, creatorAddr: str, appId: Optional[int] = None) -> Optional[int]:
    """
    Application to deploy to: the given one, else the newest one created by the caller.
    """
    if appId is not None:
        return appId
    return get_newest_created_app(algod, creatorAddr)


def buildDeploymentPlan(
    target: Optional[int],
    code: ContractCode,
    initArgs: dict,
    hasCode: bool,
) -> DeploymentPlan:
    """
    Always deploys the code, and initializes the contract only when the target has no code yet:
    initializing again would reset the stored tokens.

    @param target - application id, None when the caller has no application yet
    @param code - compiled contract code
    @param initArgs - arguments of the initialize call ({owner_id, metadata})
    @param hasCode - whether the target currently has code deployed
    @returns DeploymentPlan deploy action and optional init action
    """
    builder = TransactionBuilder(target).deployContract(code)
    if not hasCode:
        builder.functionCall(INIT_METHOD, initArgs, INIT_BUDGET)
    return builder.build()


def planDeployment(
    algod: AlgodClient,
    creatorAddr: str,
    code: ContractCode,
    initArgs: dict,
    appId: Optional[int] = None,
) -> DeploymentPlan:
    target = resolveTarget(algod, creatorAddr, appId)
    hasCode = target is not None and has_deployed_code(algod, target)
    logger.debug("Deploying to %s (has code: %s)", target, hasCode)
    return buildDeploymentPlan(target, code, initArgs, hasCode)


def prepareDeploymentTransactions(
    plan: DeploymentPlan,
    senderAddr: str,
    params: SuggestedParams,
    opup: Optional[OpUp] = None,
) -> list[Transaction]:
    """
    Returns the group transaction carrying out a deployment plan.
    Without an init action the code is deployed as an application update. With one, deploy and
    initialize fold into a single application create carrying the initialize method call, since the
    new application id is only known once the group confirms.

    @param plan - deployment plan
    @param senderAddr - account address for the sender
    @param params - suggested params for the transactions with the fees overwritten
    @param opup - optional opup applications to cover the initialize budget
    @returns Transaction[] deployment transactions
    """
    code = plan.deployAction.code
    init = plan.initAction

    if init is None:
        if plan.target is None:
            raise ValueError("Cannot update without a target application")
        return [
            ApplicationUpdateTxn(
                senderAddr,
                sp_fee(params, MIN_TXN_FEE),
                plan.target,
                code.approvalProgram,
                code.clearProgram,
            )
        ]

    if init.deposit:
        raise ValueError("Initialize call cannot carry a deposit")
    atc = AtomicTransactionComposer()
    atc.add_method_call(
        sender=senderAddr,
        signer=signer,
        app_id=0,
        method=nftABIContract.get_method_by_name(init.method),
        method_args=[encodeArgs(init.args)],
        sp=sp_fee(params, fee=budgetedCallFee(opup, init.budget)),
        approval_program=code.approvalProgram,
        clear_program=code.clearProgram,
        global_schema=code.globalSchema,
        local_schema=code.localSchema,
        extra_pages=code.extraPages,
    )
    txns = remove_signer_and_group(atc.build_group())
    return coverBudget(opup, senderAddr, txns, init.budget, params)


def submitDeploymentPlan(
    algod: AlgodClient,
    plan: DeploymentPlan,
    account: Account,
    network: int,
    opup: Optional[OpUp] = None,
) -> DeploymentResult:
    """
    Signs and sends the deployment as one atomic group. A rejected group is reported, not raised;
    the ledger applies all of its transactions or none.
    """
    txns = prepareDeploymentTransactions(plan, account.addr, algod.suggested_params(), opup)
    try:
        txid, confirmed = signAndSend(algod, txns, account.sk)
    except Exception as e:
        txid = txns[-1].get_txid()
        logger.debug("Deployment %s failed: %s", txid, e)
        return DeploymentResult(txid, plan.target, explorerUrl(network, txid), False, str(e))

    appId = confirmed.get("application-index") or plan.target
    return DeploymentResult(txid, appId, explorerUrl(network, txid), True)
