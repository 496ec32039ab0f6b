"""Tests for delegation code decoding."""

from __future__ import annotations

import pytest

from delegate7702.delegation import (
    DelegatedTo,
    NotDelegated,
    decode_delegation_code,
    get_delegation_information,
)
from delegate7702.errors import NotDelegatableError, RpcError

from conftest import FakeNode, designator


CHECKSUMMED = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class TestEmptyCode:
    @pytest.mark.parametrize("code", [None, "", "0x", "0X"])
    def test_not_delegated(self, code) -> None:
        info = decode_delegation_code(code)
        assert info == NotDelegated()
        assert info.is_delegated is False


class TestDelegationDesignator:
    def test_delegated(self) -> None:
        info = decode_delegation_code(designator(CHECKSUMMED))
        assert isinstance(info, DelegatedTo)
        assert info.is_delegated is True
        assert info.address == CHECKSUMMED

    def test_uppercase_hex(self) -> None:
        code = "0x" + ("ef0100" + CHECKSUMMED[2:]).upper()
        assert decode_delegation_code(code) == DelegatedTo(CHECKSUMMED)

    def test_points_to_ignores_case(self) -> None:
        info = decode_delegation_code(designator(CHECKSUMMED))
        assert info.points_to(CHECKSUMMED.lower())
        assert info.points_to(CHECKSUMMED.upper().replace("0X", "0x"))
        assert not info.points_to("0x" + "11" * 20)

    @pytest.mark.parametrize("pointer_bytes", [0, 19, 21, 32])
    def test_wrong_pointer_length(self, pointer_bytes: int) -> None:
        code = "0xef0100" + "11" * pointer_bytes
        with pytest.raises(NotDelegatableError, match="Malformed"):
            decode_delegation_code(code)


class TestContractCode:
    @pytest.mark.parametrize(
        "code",
        [
            "0x6000600055",
            "0x608060405234801561001057600080fd5b50",
            # right length, wrong marker
            "0xef0000" + "11" * 20,
            "0xef0101" + "11" * 20,
            "0xef01",
        ],
    )
    def test_not_delegatable(self, code: str) -> None:
        with pytest.raises(NotDelegatableError):
            decode_delegation_code(code)

    def test_malformed_hex_from_node(self) -> None:
        with pytest.raises(RpcError):
            decode_delegation_code("0xzz")


class TestGetDelegationInformation:
    def test_reads_code_from_node(self, node: FakeNode, account_address: str) -> None:
        node.set_code(account_address, designator(CHECKSUMMED))
        with node.client() as client:
            info = get_delegation_information(client, account_address)
        assert info == DelegatedTo(CHECKSUMMED)
        assert node.calls == ["eth_getCode"]

    def test_fresh_account(self, node: FakeNode, account_address: str) -> None:
        with node.client() as client:
            assert get_delegation_information(client, account_address) == NotDelegated()

    def test_contract_account(self, node: FakeNode, account_address: str) -> None:
        node.set_code(account_address, "0x60006000")
        with node.client() as client:
            with pytest.raises(NotDelegatableError, match="cannot be delegated"):
                get_delegation_information(client, account_address)
