import logging
import re
from typing import Iterable
from .datatypes import AccountId, ValidatedAccounts

logger = logging.getLogger(__name__)

ACCOUNT_ID_MIN_LENGTH = 2
ACCOUNT_ID_MAX_LENGTH = 64

VALID_ACCOUNT_ID = re.compile(r"^(([a-z\d]+[-_])*[a-z\d]+\.)*([a-z\d]+[-_])*[a-z\d]+$")

# whitespace plus the byte order mark, which str.strip() keeps
SURROUNDING_BLANKS = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def normalizeAccountId(raw: str) -> AccountId:
    return SURROUNDING_BLANKS.sub("", raw).lower()


def isValidAccountId(accountId: AccountId) -> bool:
    if not ACCOUNT_ID_MIN_LENGTH <= len(accountId) <= ACCOUNT_ID_MAX_LENGTH:
        return False
    # \d would also accept non-ascii digits
    return accountId.isascii() and VALID_ACCOUNT_ID.match(accountId) is not None


def filterAccounts(rawAccountIds: Iterable[str]) -> ValidatedAccounts:
    """
    Normalizes raw account ids and splits them by validity, keeping input order and duplicates.
    Invalid ids are logged, never raised.

    @param rawAccountIds - raw account ids as read from the input file
    @returns ValidatedAccounts normalized, valid and invalid account ids
    """
    normalized = [normalizeAccountId(raw) for raw in rawAccountIds]
    valid: list[AccountId] = []
    invalid: list[AccountId] = []
    for accountId in normalized:
        if isValidAccountId(accountId):
            valid.append(accountId)
        else:
            invalid.append(accountId)

    if invalid:
        logger.info('invalid Ids "%s"', ",".join(invalid))

    return ValidatedAccounts(normalized, valid, invalid)
