import logging
from ..config import MAX_TOKEN_PAGES, TOKENS_PAGE_SIZE
from ..contract import ContractClient
from .datatypes import AccountId, Ownership, Token, TokenClass, TokenMetadata

logger = logging.getLogger(__name__)

TOKENS_FOR_OWNER = "nft_tokens_for_owner"


class MalformedTokenError(ValueError):
    pass


def mediaForTokenClass(tokenNum: TokenClass) -> str:
    return f"{tokenNum}.png"


def parseToken(raw) -> Token:
    """
    Parses a token returned by the contract. Tokens without metadata are malformed.
    """
    if not isinstance(raw, dict):
        raise MalformedTokenError(f"token is not an object: {raw!r}")
    metadata = raw.get("metadata")
    if not isinstance(metadata, dict):
        raise MalformedTokenError(f"token {raw.get('token_id')!r} has no metadata")
    known = TokenMetadata.__dataclass_fields__
    return Token(
        token_id=str(raw.get("token_id")),
        owner_id=raw.get("owner_id"),
        metadata=TokenMetadata(**{k: v for k, v in metadata.items() if k in known}),
    )


def iterTokensForOwner(
    contract: ContractClient,
    accountId: AccountId,
    pageSize: int = TOKENS_PAGE_SIZE,
    maxPages: int = MAX_TOKEN_PAGES,
):
    """
    Iterator over the tokens owned by an account, one view call per page.
    Raises MalformedTokenError when the contract keeps answering with the same page
    or more than maxPages pages would be needed.
    """
    fromIndex = 0
    previousPage = None
    for _ in range(maxPages):
        page = contract.view(
            TOKENS_FOR_OWNER,
            {"account_id": accountId, "from_index": str(fromIndex), "limit": pageSize},
        )
        if not isinstance(page, list):
            raise MalformedTokenError(f"expected a list of tokens, got {page!r}")
        if page and page == previousPage:
            raise MalformedTokenError(f"page at index {fromIndex} repeats the previous page")
        for raw in page:
            yield parseToken(raw)
        if len(page) < pageSize:
            return
        fromIndex += len(page)
        previousPage = page
    raise MalformedTokenError(f"more than {maxPages} pages of tokens")


def checkOwnership(
    contract: ContractClient,
    accountId: AccountId,
    tokenNum: TokenClass,
    pageSize: int = TOKENS_PAGE_SIZE,
) -> Ownership:
    """
    Checks whether an account already holds a token of the given class.

    @param contract - contract client to query
    @param accountId - account to check
    @param tokenNum - token class, matched against the "<tokenNum>.png" media of owned tokens
    @param pageSize - number of tokens requested per view call
    @returns Ownership OWNED, NOT_OWNED or QUERY_FAILED when the owned tokens could not be read
    """
    media = mediaForTokenClass(tokenNum)
    try:
        for token in iterTokensForOwner(contract, accountId, pageSize):
            if token.metadata.media == media:
                return Ownership.OWNED
    except Exception as e:
        logger.warning("Problem with %s: %s", accountId, e)
        return Ownership.QUERY_FAILED
    return Ownership.NOT_OWNED


def shouldSkip(ownership: Ownership, skipOnQueryFailure: bool = True) -> bool:
    """
    Whether to skip minting for an ownership state. A failed query counts as owned by default
    so that an unreachable ledger never causes a double mint.
    """
    if ownership == Ownership.QUERY_FAILED:
        return skipOnQueryFailure
    return ownership == Ownership.OWNED
