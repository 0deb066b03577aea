"""
Tests for version resolution and the User-Agent header built from it.
"""
import re
from importlib import metadata

import httpx

from shyft_sdk import __version__, version
from shyft_sdk.config import ClientConfig
from shyft_sdk.request import RequestDescriptor
from shyft_sdk.transport import HttpTransport


def test_version_format():
    """Version string follows semantic versioning"""
    assert re.match(r'^\d+\.\d+\.\d+', __version__)


def test_resolve_version_reads_installed_metadata(monkeypatch):
    seen = []

    def _version(name):
        seen.append(name)
        return "2.3.4"

    monkeypatch.setattr(metadata, "version", _version)
    assert version.resolve_version() == "2.3.4"
    assert seen == ["shyft-sdk"]


def test_resolve_version_defaults_when_not_installed(monkeypatch):
    def _missing(name):
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(metadata, "version", _missing)
    assert version.resolve_version() == version.DEFAULT_VERSION


def test_user_agent():
    assert version.user_agent() == f"shyft-sdk-python/{__version__}"
    assert version.user_agent("9.9.9") == "shyft-sdk-python/9.9.9"


async def test_user_agent_header_carries_version(monkeypatch):
    monkeypatch.setattr(version, "__version__", "4.5.6")
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="{}")

    transport = HttpTransport(ClientConfig(api_key="k"), transport=httpx.MockTransport(handler))
    await transport.send(RequestDescriptor("GET", "transaction/parsed"))
    await transport.aclose()

    assert seen[0].headers["user-agent"] == "shyft-sdk-python/4.5.6"
