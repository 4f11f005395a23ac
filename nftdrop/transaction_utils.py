from copy import copy
from algosdk.v2client.algod import AlgodClient
from algosdk.atomic_transaction_composer import TransactionWithSigner, EmptySigner
from algosdk.logic import get_application_address
from algosdk.transaction import (
    SuggestedParams,
    Transaction,
    PaymentTxn,
    assign_group_id,
    wait_for_confirmation,
)
from .config import (
    APP_CALL_BUDGET,
    CONFIRMATION_ROUNDS,
    EXPLORER_URL,
    INNER_TXN_BUDGET,
    NETWORK_NAMES,
)


signer = EmptySigner()


def sp_fee(sp: SuggestedParams, fee: int, flat_fee: bool = True) -> SuggestedParams:
    """
    Get a copy of suggested params but with a different fee.
    """
    sp = copy(sp)
    sp.flat_fee = flat_fee
    sp.fee = fee
    return sp


def remove_signer_and_group(
    txns_with_signer: list[TransactionWithSigner],
) -> list[Transaction]:
    res_txns: list[Transaction] = []
    for tws in txns_with_signer:
        txn = tws.txn
        txn.group = None
        res_txns.append(txn)
    return res_txns


def depositTransaction(
    sender: str,
    appId: int,
    amount: int,
    params: SuggestedParams,
) -> Transaction:
    """
    Payment of an attached deposit to the application account.
    """
    return PaymentTxn(sender, params, get_application_address(appId), amount)


def innerTransactionsForBudget(budget: int) -> int:
    """
    Number of inner opup transactions needed on top of a single application call
    to reach the given opcode budget.
    """
    missing = budget - APP_CALL_BUDGET
    if missing <= 0:
        return 0
    return -(-missing // INNER_TXN_BUDGET)


def signAndSend(algod: AlgodClient, txns: list[Transaction], sk: str) -> tuple[str, dict]:
    """
    Groups, signs and sends the transactions, waiting for the last one to confirm.

    @param algod - Algod client
    @param txns - transactions to send as one atomic group
    @param sk - secret key for signing transactions
    @returns (txId, confirmedTxn) id and pending info of the last transaction in the group
    """
    if len(txns) > 1:
        txns = assign_group_id(txns)
    signed_txns = [txn.sign(sk) for txn in txns]
    algod.send_transactions(signed_txns)
    txid = txns[-1].get_txid()
    confirmed = wait_for_confirmation(algod, txid, CONFIRMATION_ROUNDS)
    return txid, confirmed


def explorerUrl(network: int, txid: str) -> str:
    return f"{EXPLORER_URL}/{NETWORK_NAMES[network]}/transaction/{txid}"
