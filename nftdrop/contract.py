import json
import logging
from base64 import b64decode
from dataclasses import dataclass
from typing import Any, Optional, Protocol
from algosdk.abi import Contract, Method
from algosdk.atomic_transaction_composer import AtomicTransactionComposer
from algosdk.encoding import encode_address
from algosdk.error import (
    ABIEncodingError,
    AlgodHTTPError,
    AtomicTransactionComposerError,
    ConfirmationTimeoutError,
    TransactionRejectedError,
)
from algosdk.transaction import SuggestedParams, Transaction
from algosdk.v2client.algod import AlgodClient
from algosdk.v2client.models import SimulateRequest
from .abi_contracts import nftABIContract
from .config import MIN_TXN_FEE, Account, OpUp
from .errors import ContractError
from .opup import budgetedCallFee, coverBudget
from .transaction_utils import (
    signer,
    sp_fee,
    remove_signer_and_group,
    depositTransaction,
    signAndSend,
)

logger = logging.getLogger(__name__)

ABI_RETURN_PREFIX = bytes.fromhex("151f7c75")

# simulated views are not bound by a caller supplied budget
VIEW_OPCODE_BUDGET = 70_000

# any well formed address works as the sender of a simulated view
VIEW_SENDER = encode_address(bytes(32))


@dataclass
class CallResult:
    txId: str
    confirmedRound: int
    returnValue: Any = None


class ContractClient(Protocol):
    """Capability to invoke named methods of a remote contract."""

    def view(self, method: str, args: dict) -> Any:
        ...

    def call(self, method: str, args: dict, budget: int, deposit: int = 0) -> CallResult:
        ...


def encodeArgs(args: dict) -> str:
    return json.dumps(args, separators=(",", ":"))


def decodeReturnValue(method: str, value: Optional[str]) -> Any:
    """
    Decodes the JSON string returned by a contract method.
    """
    if value is None or value == "":
        return None
    try:
        return json.loads(value)
    except ValueError:
        raise ContractError(method, f"malformed response {value!r}") from None


def parseReturnLog(method: Method, confirmedTxn: dict) -> Optional[str]:
    """
    Extracts the ABI return value from the logs of a confirmed application call.
    """
    if method.returns.type == method.returns.VOID:
        return None
    logs = confirmedTxn.get("logs", [])
    if not logs:
        return None
    lastLog = b64decode(logs[-1])
    if not lastLog.startswith(ABI_RETURN_PREFIX):
        return None
    return method.returns.type.decode(lastLog[len(ABI_RETURN_PREFIX):])


class AlgodContractClient:
    def __init__(
        self,
        algod: AlgodClient,
        appId: int,
        account: Optional[Account] = None,
        opup: Optional[OpUp] = None,
        contract: Contract = nftABIContract,
    ):
        """Contract client invoking ABI methods of an application through algod"""
        self.algod = algod
        self.appId = appId
        self.account = account
        self.opup = opup
        self.contract = contract

    def view(self, method: str, args: dict) -> Any:
        """
        Simulates a read-only method call and returns its decoded result.

        @param method - name of the ABI method
        @param args - method arguments, JSON encoded into the single string argument
        @returns decoded return value
        """
        simReq = SimulateRequest(
            txn_groups=[],
            allow_empty_signatures=True,
            allow_unnamed_resources=True,
            extra_opcode_budget=VIEW_OPCODE_BUDGET,
        )
        try:
            atc = AtomicTransactionComposer()
            atc.add_method_call(
                sender=self.account.addr if self.account else VIEW_SENDER,
                signer=signer,
                app_id=self.appId,
                method=self.contract.get_method_by_name(method),
                method_args=[encodeArgs(args)],
                sp=self.algod.suggested_params(),
            )
            result = atc.simulate(self.algod, simReq)
        except (AlgodHTTPError, AtomicTransactionComposerError, OSError) as e:
            raise ContractError(method, str(e)) from e

        if result.failure_message:
            raise ContractError(method, result.failure_message)
        abiResult = result.abi_results[0]
        if abiResult.decode_error is not None:
            raise ContractError(method, f"could not decode return value: {abiResult.decode_error}")
        return decodeReturnValue(method, abiResult.return_value)

    def prepareCallTransactions(
        self,
        method: str,
        args: dict,
        budget: int,
        deposit: int,
        params: SuggestedParams,
    ) -> list[Transaction]:
        """
        Returns a group transaction calling the given method.

        @param method - name of the ABI method
        @param args - method arguments, JSON encoded into the single string argument
        @param budget - opcode budget the call needs
        @param deposit - microALGO paid to the application account alongside the call
        @param params - suggested params for the transactions with the fees overwritten
        @returns Transaction[] call transactions
        """
        if self.account is None:
            raise ContractError(method, "no signing account configured")
        senderAddr = self.account.addr

        atc = AtomicTransactionComposer()
        atc.add_method_call(
            sender=senderAddr,
            signer=signer,
            app_id=self.appId,
            method=self.contract.get_method_by_name(method),
            method_args=[encodeArgs(args)],
            sp=sp_fee(params, fee=budgetedCallFee(self.opup, budget)),
        )
        txns = remove_signer_and_group(atc.build_group())

        if deposit > 0:
            txns = [depositTransaction(senderAddr, self.appId, deposit, sp_fee(params, MIN_TXN_FEE))] + txns

        return coverBudget(self.opup, senderAddr, txns, budget, params)

    def call(self, method: str, args: dict, budget: int, deposit: int = 0) -> CallResult:
        """
        Signs and sends a state changing method call, waiting for confirmation.

        @param method - name of the ABI method
        @param args - method arguments
        @param budget - opcode budget the call needs
        @param deposit - microALGO attached to the call
        @returns CallResult confirmed transaction id, round and decoded return value (None when unreadable)
        """
        try:
            params = self.algod.suggested_params()
            txns = self.prepareCallTransactions(method, args, budget, deposit, params)
            txid, confirmed = signAndSend(self.algod, txns, self.account.sk)
        except (
            AlgodHTTPError,
            AtomicTransactionComposerError,
            ConfirmationTimeoutError,
            TransactionRejectedError,
            OSError,
        ) as e:
            raise ContractError(method, str(e)) from e

        logger.debug("%s confirmed in round %s (%s)", method, confirmed.get("confirmed-round"), txid)
        # the call is committed, an unreadable return value must not turn it into a failure
        try:
            rawReturn = parseReturnLog(self.contract.get_method_by_name(method), confirmed)
            returnValue = decodeReturnValue(method, rawReturn)
        except (ContractError, ABIEncodingError, ValueError) as e:
            logger.debug("Ignoring return value of %s (%s): %s", method, txid, e)
            returnValue = None
        return CallResult(txid, confirmed.get("confirmed-round", 0), returnValue)
