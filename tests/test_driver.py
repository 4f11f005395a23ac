import json
import logging
import pytest
from fakes import FakeContract, token
from nftdrop.config import DEFAULT_PER_TX, MINT_BUDGET
from nftdrop.distribution.datatypes import MintOutcome, MintStatus
from nftdrop.distribution.driver import (
    distributeFromFile,
    loadAccountIds,
    mintMethodFor,
    mintToken,
    runDistribution,
)
from nftdrop.errors import ConfigurationError

APP_ID = 1234


def test_mint_method_for_token_class():
    assert mintMethodFor("1") == "nft_mint_one"
    assert mintMethodFor("3") == "nft_mint_two"
    assert mintMethodFor("2") == "nft_mint_two"
    assert mintMethodFor("01") == "nft_mint_two"


def test_mint_token_attaches_budget_and_no_deposit():
    contract = FakeContract()

    result = mintToken(contract, "alice.near", "1")

    assert contract.calls == [("nft_mint_one", {"token_owner_id": "alice.near"}, MINT_BUDGET, 0)]
    assert result.txId == "TX1"


def test_mints_every_account_in_order(caplog):
    contract = FakeContract()

    with caplog.at_level(logging.INFO, logger="nftdrop.distribution.driver"):
        run = runDistribution(contract, APP_ID, ["alice.near", "bob.near"], "1")

    assert run.outcomes == [
        MintOutcome("alice.near", MintStatus.MINTED, "TX1"),
        MintOutcome("bob.near", MintStatus.MINTED, "TX2"),
    ]
    assert contract.mintedAccounts() == ["alice.near", "bob.near"]
    assert [r.getMessage() for r in caplog.records] == ["Added alice.near", "Added bob.near"]


def test_token_class_selects_mint_method():
    contract = FakeContract()

    runDistribution(contract, APP_ID, ["alice.near"], "3")

    assert contract.calls[0][0] == "nft_mint_two"


def test_skips_account_already_owning_token():
    contract = FakeContract(owned={"x.near": [token("x.near", "1.png")]})

    run = runDistribution(contract, APP_ID, ["x.near"], "1")

    assert run.outcomes == [MintOutcome("x.near", MintStatus.SKIPPED, "OWNED")]
    assert contract.calls == []


def test_token_of_other_class_does_not_skip():
    contract = FakeContract(owned={"x.near": [token("x.near", "2.png")]})

    run = runDistribution(contract, APP_ID, ["x.near"], "1")

    assert run.minted == ["x.near"]


def test_failed_mint_does_not_abort_run(caplog):
    contract = FakeContract(failingMints={"y.near"})

    with caplog.at_level(logging.INFO, logger="nftdrop.distribution.driver"):
        run = runDistribution(contract, APP_ID, ["x.near", "y.near", "z.near"], "1")

    assert [o.account for o in run.outcomes] == ["x.near", "y.near", "z.near"]
    assert [o.status for o in run.outcomes] == [
        MintStatus.MINTED,
        MintStatus.FAILED,
        MintStatus.MINTED,
    ]
    assert "Smart contract panicked" in run.outcomes[1].detail
    assert contract.mintedAccounts() == ["x.near", "y.near", "z.near"]
    assert "Failed y.near" in [r.getMessage() for r in caplog.records]


def test_query_failure_skips_by_default():
    contract = FakeContract(failingViews={"x.near"})

    run = runDistribution(contract, APP_ID, ["x.near"], "1")

    assert run.outcomes == [MintOutcome("x.near", MintStatus.SKIPPED, "QUERY_FAILED")]
    assert contract.calls == []


def test_query_failure_can_be_minted_when_policy_allows():
    contract = FakeContract(failingViews={"x.near"})

    run = runDistribution(contract, APP_ID, ["x.near"], "1", skipOnQueryFailure=False)

    assert run.minted == ["x.near"]


def test_duplicates_are_processed_twice():
    contract = FakeContract()

    run = runDistribution(contract, APP_ID, ["alice.near", "alice.near"], "1")

    # the second pass sees the token minted by the first
    assert [o.status for o in run.outcomes] == [MintStatus.MINTED, MintStatus.SKIPPED]
    assert len(contract.views) == 2


def test_rerun_only_retries_failures():
    contract = FakeContract(failingMints={"y.near"})
    accounts = ["x.near", "y.near", "z.near"]
    first = runDistribution(contract, APP_ID, accounts, "1")
    contract.failingMints.clear()
    contract.calls.clear()

    second = runDistribution(contract, APP_ID, accounts, "1")

    assert first.failed == ["y.near"]
    assert contract.mintedAccounts() == ["y.near"]
    assert second.skipped == ["x.near", "z.near"]
    assert second.minted == ["y.near"]


def test_amount_per_tx_does_not_batch():
    contract = FakeContract()

    run = runDistribution(contract, APP_ID, ["a1.near", "a2.near", "a3.near"], "1", amountPerTx=2)

    assert run.amountPerTx == 2
    assert len(contract.calls) == 3


def test_run_summary():
    contract = FakeContract(owned={"x.near": [token("x.near", "1.png")]}, failingMints={"y.near"})

    run = runDistribution(contract, APP_ID, ["x.near", "y.near", "z.near"], "1")

    assert run.contractId == APP_ID
    assert run.amountPerTx == DEFAULT_PER_TX
    assert run.summary() == {
        MintStatus.MINTED: 1,
        MintStatus.SKIPPED: 1,
        MintStatus.FAILED: 1,
    }


def test_empty_account_list_is_an_empty_run():
    run = runDistribution(FakeContract(), APP_ID, [], "1")

    assert run.outcomes == []


def test_distribute_from_file(tmp_path):
    path = tmp_path / "accounts.json"
    path.write_text(json.dumps(["Alice.NEAR", " bob.near ", "bad id!"]))
    contract = FakeContract()

    run = distributeFromFile(contract, APP_ID, str(path), "1")

    assert [o.account for o in run.outcomes] == ["alice.near", "bob.near"]
    assert contract.mintedAccounts() == ["alice.near", "bob.near"]


def test_load_account_ids_rejects_non_string_entries(tmp_path):
    path = tmp_path / "accounts.json"
    path.write_text(json.dumps(["alice.near", 7]))

    with pytest.raises(ConfigurationError):
        loadAccountIds(str(path))


def test_load_account_ids_rejects_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        loadAccountIds(str(tmp_path / "missing.json"))


def test_load_account_ids_rejects_invalid_json(tmp_path):
    path = tmp_path / "accounts.json"
    path.write_text("[alice.near")

    with pytest.raises(ConfigurationError):
        loadAccountIds(str(path))
