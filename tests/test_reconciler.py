"""Tests for MembershipReconciler."""

import aiohttp
import pytest

from models.data_models import Channel
from services.errors import ReconciliationError
from services.reconciler import MembershipReconciler

from conftest import FakeGateway, api_error


class TestJoinPublicChannels:
    @pytest.mark.asyncio
    async def test_joins_only_non_member_public_channels(self):
        f = Channel(id="F", name="f")
        member = Channel(id="M", name="m", is_member=True)
        gateway = FakeGateway([f, member])

        result = await MembershipReconciler(gateway).join_public_channels([f, member])

        assert gateway.join_calls == ["F"]
        assert result.joined == (f.as_member(),)
        assert set(c.id for c in result.members) == {"F", "M"}
        assert all(c.is_member for c in result.members)

    @pytest.mark.asyncio
    async def test_never_joins_private_channels(self):
        private = Channel(id="G1", name="secret", is_private=True)
        gateway = FakeGateway([private])

        result = await MembershipReconciler(gateway).join_public_channels([private])

        assert gateway.join_calls == []
        assert result.skipped_private == (private,)
        assert result.members == ()

    @pytest.mark.asyncio
    async def test_private_member_channel_is_kept(self):
        private = Channel(id="G1", name="secret", is_private=True, is_member=True)
        gateway = FakeGateway([private])

        result = await MembershipReconciler(gateway).join_public_channels([private])

        assert gateway.join_calls == []
        assert result.members == (private,)

    @pytest.mark.asyncio
    async def test_join_failure_does_not_stop_others(self):
        a = Channel(id="A", name="a")
        b = Channel(id="B", name="b")
        gateway = FakeGateway([a, b])
        gateway.join_errors["A"] = api_error("method_not_supported_for_channel_type")

        result = await MembershipReconciler(gateway).join_public_channels([a, b])

        assert gateway.join_calls == ["A", "B"]
        assert result.failed == (a,)
        assert result.joined == (b.as_member(),)
        assert a not in result.members

    @pytest.mark.asyncio
    async def test_auth_error_is_fatal(self):
        a = Channel(id="A", name="a")
        b = Channel(id="B", name="b")
        gateway = FakeGateway([a, b])
        gateway.join_errors["A"] = api_error("token_revoked")

        with pytest.raises(ReconciliationError):
            await MembershipReconciler(gateway).join_public_channels([a, b])
        assert gateway.join_calls == ["A"]

    @pytest.mark.asyncio
    async def test_transport_error_is_fatal(self):
        a = Channel(id="A", name="a")
        gateway = FakeGateway([a])
        gateway.join_errors["A"] = aiohttp.ServerDisconnectedError()

        with pytest.raises(ReconciliationError):
            await MembershipReconciler(gateway).join_public_channels([a])
