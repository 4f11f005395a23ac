import pytest
from algosdk import account, mnemonic
from algosdk.transaction import StateSchema, SuggestedParams
from nftdrop.config import Account
from nftdrop.deployment.datatypes import ContractCode


@pytest.fixture
def params():
    return SuggestedParams(
        fee=1000,
        first=1000,
        last=2000,
        gh="SGO1GKSzyE7IEPItTxCByw9x8FmnrCDexi9/cOUJOiI=",
        gen="testnet-v1.0",
        flat_fee=True,
        min_fee=1000,
    )


@pytest.fixture
def user():
    sk, addr = account.generate_account()
    return Account(addr, sk)


@pytest.fixture
def user_mnemonic(user):
    return mnemonic.from_private_key(user.sk)


@pytest.fixture
def code():
    return ContractCode(
        approvalProgram=b"\x08\x81\x01\x43",
        clearProgram=b"\x08\x81\x01\x43",
        globalSchema=StateSchema(num_uints=2, num_byte_slices=4),
        localSchema=StateSchema(num_uints=0, num_byte_slices=0),
        extraPages=3,
    )
