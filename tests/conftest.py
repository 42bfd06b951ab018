"""Pytest configuration and shared fixtures."""

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from spl_token_sdk import Authority


@pytest.fixture
def owner():
    return Keypair()


@pytest.fixture
def members():
    return [Keypair(), Keypair(), Keypair()]


@pytest.fixture
def multisig():
    return Pubkey.new_unique()


@pytest.fixture
def single_authority(owner):
    return Authority.single(owner)


@pytest.fixture
def multisig_authority(multisig):
    return Authority.multisig(multisig)
