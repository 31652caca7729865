"""Shared test fixtures for qq-bot-adapter."""

from typing import Any

import pytest


@pytest.fixture
def guild_payload() -> dict[str, Any]:
    """An AT_MESSAGE_CREATE payload with a mention, a face and an image."""
    return {
        "id": "08f3fb8c8a9cd5b6c41010d4e3a70f38a2054801",
        "content": '<@!1234> hello <faceType=1,faceId="13",ext="eyJ0">',
        "author": {"id": "1234567", "username": "ann", "bot": False},
        "member": {"nick": "Annie", "roles": ["1", "4"]},
        "guild_id": "g1",
        "channel_id": "c1",
        "mentions": [{"id": "1234", "username": "bot", "bot": True}],
        "attachments": [
            {"content_type": "image/png", "url": "gchat.qpic.cn/a.png", "filename": "a.png"},
        ],
        "timestamp": "2023-11-06T13:37:18+08:00",
        "message_reference": {"message_id": "ref1"},
    }


@pytest.fixture
def c2c_payload() -> dict[str, Any]:
    """A C2C_MESSAGE_CREATE payload."""
    return {
        "id": "ROBOT1.0_c2c",
        "content": "hi there",
        "author": {"user_openid": "E4F4AEA33253A2797FB897C50B81D7ED"},
        "timestamp": "2024-01-01T08:00:00+08:00",
    }


@pytest.fixture
def group_payload() -> dict[str, Any]:
    """A GROUP_AT_MESSAGE_CREATE payload."""
    return {
        "id": "ROBOT1.0_group",
        "content": " /ping",
        "author": {"member_openid": "MEMBER_OPENID"},
        "group_openid": "GROUP_OPENID",
        "timestamp": "2024-01-01T08:00:00+08:00",
    }


@pytest.fixture
def direct_payload() -> dict[str, Any]:
    """A DIRECT_MESSAGE_CREATE payload."""
    return {
        "id": "dm1",
        "content": "private words",
        "author": {"id": "42", "username": "bob"},
        "guild_id": "dm-guild",
        "channel_id": "dm-channel",
        "src_guild_id": "g1",
    }
