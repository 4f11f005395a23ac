import logging
import pytest
from nftdrop.distribution.validator import filterAccounts, isValidAccountId, normalizeAccountId


def test_filter_accounts_normalizes_and_splits_in_order():
    accounts = filterAccounts(["Alice.NEAR", " bob.near ", "bad id!"])

    assert accounts.normalized == ["alice.near", "bob.near", "bad id!"]
    assert accounts.invalid == ["bad id!"]
    assert accounts.valid == ["alice.near", "bob.near"]


def test_filter_accounts_keeps_duplicates():
    accounts = filterAccounts(["alice.near", "ALICE.near", "alice.near "])

    assert accounts.valid == ["alice.near", "alice.near", "alice.near"]


def test_filter_accounts_logs_invalid_ids_once(caplog):
    with caplog.at_level(logging.INFO, logger="nftdrop.distribution.validator"):
        filterAccounts(["ok.near", "bad id!", "-dash.near"])

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ['invalid Ids "bad id!,-dash.near"']


def test_filter_accounts_logs_nothing_when_all_valid(caplog):
    with caplog.at_level(logging.INFO, logger="nftdrop.distribution.validator"):
        accounts = filterAccounts(["a1.near", "b-2.testnet"])

    assert accounts.invalid == []
    assert caplog.records == []


def test_filter_accounts_with_no_valid_ids_is_empty():
    accounts = filterAccounts(["bad id!", ""])

    assert accounts.valid == []
    assert accounts.invalid == ["bad id!", ""]


def test_normalize_account_id():
    assert normalizeAccountId("  MiXeD.Near\t") == "mixed.near"


@pytest.mark.parametrize(
    "accountId",
    ["ab", "alice.near", "a-b_c.d-e.near", "0x.near", "sub.alice.testnet", "a" * 64],
)
def test_valid_account_ids(accountId):
    assert isValidAccountId(accountId)


@pytest.mark.parametrize(
    "accountId",
    [
        "a",
        "a" * 65,
        "alice..near",
        ".alice",
        "alice.",
        "alice-.near",
        "al--ice",
        "al_-ice",
        "alice near",
        "Alice.near",
        "al!ce",
        "ali٣e",
    ],
)
def test_invalid_account_ids(accountId):
    assert not isValidAccountId(accountId)


def test_normalize_strips_byte_order_mark():
    assert normalizeAccountId("\ufeffAlice.near") == "alice.near"
    assert normalizeAccountId(" \ufeff bob.near \n") == "bob.near"


def test_filter_accounts_accepts_bom_prefixed_first_entry():
    accounts = filterAccounts(["\ufeffalice.near", "bob.near"])

    assert accounts.valid == ["alice.near", "bob.near"]
    assert accounts.invalid == []
