from typing import Optional
from algosdk.transaction import Transaction, SuggestedParams, ApplicationNoOpTxn
from algosdk.encoding import encode_as_bytes
from .config import MIN_TXN_FEE, OpUp
from .transaction_utils import sp_fee, innerTransactionsForBudget

MAX_INNER_TRANSACTIONS = 256


def budgetedCallFee(opup: Optional[OpUp], budget: int) -> int:
    """
    Fee of an application call needing the given opcode budget. Without opup applications the
    call itself pays for the inner transactions the contract issues to raise its budget.
    """
    if opup is not None:
        return MIN_TXN_FEE
    return (innerTransactionsForBudget(budget) + 1) * MIN_TXN_FEE


def coverBudget(
    opup: Optional[OpUp],
    senderAddr: str,
    txns: list[Transaction],
    budget: int,
    params: SuggestedParams,
) -> list[Transaction]:
    """
    Raises the opcode budget of a transaction group by prefixing it with a call to the opup
    applications. The group is returned as is when no opup applications are configured or a
    single application call already covers the budget.

    @param opup - opup applications, None when calls pool their own fee instead
    @param senderAddr - account address for the sender
    @param txns - ungrouped transactions needing the budget
    @param budget - opcode budget the group needs
    @param params - suggested params for the transactions with the fees overwritten
    @returns Transaction[] ungrouped transactions, opup call first
    """
    numInnerTransactions = innerTransactionsForBudget(budget)
    if opup is None or numInnerTransactions == 0:
        return txns
    if numInnerTransactions > MAX_INNER_TRANSACTIONS:
        raise ValueError(f"Opcode budget {budget} needs more than {MAX_INNER_TRANSACTIONS} inner transactions")

    prefix = ApplicationNoOpTxn(
        senderAddr,
        sp_fee(params, (numInnerTransactions + 1) * MIN_TXN_FEE, flat_fee=True),
        opup.callerAppId,
        app_args=[encode_as_bytes(numInnerTransactions)],
        foreign_apps=[opup.baseAppId],
    )
    for t in txns:
        t.group = None
    return [prefix] + txns
