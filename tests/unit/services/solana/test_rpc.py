"""Solana JSON-RPC клиент: разбор ответов и параметры запросов."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from config.settings import SolanaSettings
from deeptrader.services.solana.rpc import (
    SolanaRpcClient,
    SolanaRpcError,
    parse_account_owner,
    parse_account_owners,
    parse_largest_accounts,
)

MINT = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


class TestParseLargestAccounts:
    def test_amounts_are_integers(self):
        result = {
            "context": {"slot": 1},
            "value": [
                {"address": "acc-1", "amount": "1000", "decimals": 6, "uiAmount": 0.001},
                {"address": "acc-2", "amount": "250", "decimals": 6, "uiAmount": 0.00025},
            ],
        }

        assert parse_largest_accounts(result) == [("acc-1", 1000), ("acc-2", 250)]

    def test_broken_amount_becomes_zero(self):
        result = {"value": [{"address": "acc-1", "amount": "n/a"}]}

        assert parse_largest_accounts(result) == [("acc-1", 0)]

    def test_rows_without_address_are_dropped(self):
        result = {"value": [{"amount": "5"}, {"address": "acc-2", "amount": "7"}]}

        assert parse_largest_accounts(result) == [("acc-2", 7)]

    @pytest.mark.parametrize("result", [None, {}, {"value": "oops"}, []])
    def test_malformed_response(self, result):
        with pytest.raises(SolanaRpcError):
            parse_largest_accounts(result)


class TestParseAccountOwner:
    def test_missing_account(self):
        assert parse_account_owner({"value": None}) is None

    def test_token_account_authority(self):
        result = {
            "value": {
                "owner": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
                "data": {"parsed": {"info": {"mint": MINT, "owner": "LockAuthority"}}},
            }
        }

        assert parse_account_owner(result) == "LockAuthority"

    def test_falls_back_to_program_owner(self):
        result = {"value": {"owner": "SomeProgram", "data": ["", "base64"]}}

        assert parse_account_owner(result) == "SomeProgram"


class TestSolanaRpcClient:
    @pytest.mark.asyncio
    async def test_call_before_start(self):
        client = SolanaRpcClient(SolanaSettings())

        with pytest.raises(SolanaRpcError):
            await client.rpc_call("getHealth")

    @pytest.mark.asyncio
    async def test_program_accounts_query(self):
        client = SolanaRpcClient(SolanaSettings(commitment="finalized"))
        rpc = AsyncMock(return_value=[{"pubkey": "acc-1", "account": {}}, {"account": {}}])

        with patch.object(client, "rpc_call", rpc):
            accounts = await client.fetch_program_accounts(MINT, 165, "TokenProgram")

        assert accounts == ["acc-1"]
        method, params = rpc.await_args.args
        assert method == "getProgramAccounts"
        assert params[0] == "TokenProgram"
        config = params[1]
        assert config["commitment"] == "finalized"
        assert {"dataSize": 165} in config["filters"]
        assert {"memcmp": {"offset": 0, "bytes": MINT}} in config["filters"]

    @pytest.mark.asyncio
    async def test_holder_distribution_query(self):
        client = SolanaRpcClient(SolanaSettings())
        rpc = AsyncMock(return_value={"value": [{"address": "acc-1", "amount": "42"}]})

        with patch.object(client, "rpc_call", rpc):
            holders = await client.fetch_holder_distribution(MINT)

        assert holders == [("acc-1", 42)]
        assert rpc.await_args.args[0] == "getTokenLargestAccounts"
        assert rpc.await_args.args[1][0] == MINT

    @pytest.mark.asyncio
    async def test_account_owner_uses_json_parsed(self):
        client = SolanaRpcClient(SolanaSettings())
        rpc = AsyncMock(return_value={"value": {"owner": "Prog", "data": ["", "base64"]}})

        with patch.object(client, "rpc_call", rpc):
            owner = await client.fetch_account_owner("acc-1")

        assert owner == "Prog"
        assert rpc.await_args.args[1][1]["encoding"] == "jsonParsed"

    @pytest.mark.asyncio
    async def test_account_owners_in_one_call(self):
        client = SolanaRpcClient(SolanaSettings())
        rpc = AsyncMock(
            return_value={
                "value": [
                    {"owner": "Prog", "data": {"parsed": {"info": {"owner": "LockAuthority"}}}},
                    None,
                ]
            }
        )

        with patch.object(client, "rpc_call", rpc):
            owners = await client.fetch_account_owners(["acc-1", "acc-2"])

        assert owners == ["LockAuthority", None]
        rpc.assert_awaited_once()
        method, params = rpc.await_args.args
        assert method == "getMultipleAccounts"
        assert params[0] == ["acc-1", "acc-2"]

    @pytest.mark.asyncio
    async def test_no_accounts_no_call(self):
        client = SolanaRpcClient(SolanaSettings())
        rpc = AsyncMock()

        with patch.object(client, "rpc_call", rpc):
            assert await client.fetch_account_owners([]) == []
        rpc.assert_not_awaited()


class TestParseAccountOwners:
    def test_length_mismatch(self):
        with pytest.raises(SolanaRpcError):
            parse_account_owners({"value": [None]}, expected=2)

    def test_malformed(self):
        with pytest.raises(SolanaRpcError):
            parse_account_owners(None, expected=1)
